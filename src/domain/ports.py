"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from typing import Protocol

from .models import User


class UserRepository(Protocol):
    """Port interface for user persistence."""

    def create(
        self,
        username: str,
        email: str,
        password_hash: str,
        activation_token: str,
    ) -> User:
        """
        Insert a new user row.

        The store enforces email uniqueness; it is the authoritative guard
        against concurrent registrations for the same email.

        Args:
            username: Username exactly as submitted
            email: Email exactly as submitted (case-sensitive)
            password_hash: bcrypt digest
            activation_token: Opaque activation token

        Returns:
            The persisted User with its generated id

        Raises:
            EmailInUse: If a row with this email already exists
            PersistenceError: For any other store failure
        """
        ...

    def find_by_email(self, email: str) -> User | None:
        """
        Look up a user by exact email match.

        Raises:
            PersistenceError: If the store cannot be queried
        """
        ...

    def truncate(self) -> None:
        """Delete every user row (tests and operations only)."""
        ...


class ActivationNotifier(Protocol):
    """Port interface for activation message delivery."""

    def send_activation(self, email: str, token: str) -> None:
        """
        Dispatch an activation message.

        Args:
            email: Recipient email address
            token: Activation token to embed in the message

        Raises:
            NotificationDispatchError: If the transport rejects the message
        """
        ...
