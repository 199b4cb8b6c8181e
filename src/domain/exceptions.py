"""
Domain exceptions - Semantic error types for registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""

from .validation import ValidationResult


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class ValidationFailed(RegistrationError):
    """One or more fields failed validation (user-correctable, HTTP 400)."""

    def __init__(self, result: ValidationResult) -> None:
        super().__init__(", ".join(result.errors))
        self.result = result


class EmailInUse(ValidationFailed):
    """Email already belongs to a registered user."""

    def __init__(self, email: str) -> None:
        super().__init__(ValidationResult.email_in_use())
        self.email = email

    def __str__(self) -> str:
        return self.email


class PersistenceError(RegistrationError):
    """Unexpected store failure (server fault, never a duplicate email)."""

    pass


class NotificationDispatchError(RegistrationError):
    """Activation message could not be handed to the notification transport."""

    pass
