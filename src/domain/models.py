"""
Domain models - Registration input and the persisted user entity.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RegistrationRequest:
    """Caller-supplied candidate account. Subject of validation, so anything goes."""

    username: str | None = None
    email: str | None = None
    password: str | None = None


@dataclass(frozen=True)
class User:
    """
    Persisted user account.

    password_hash is a bcrypt digest (never the plaintext). activation_token
    is issued at registration and cleared by the activation flow.
    """

    id: int
    username: str
    email: str
    password_hash: str
    activation_token: str | None


@dataclass(frozen=True)
class RegistrationResult:
    """Outcome of a successful registration."""

    user: User
    notification_sent: bool
