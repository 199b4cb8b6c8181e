"""
Domain layer - Pure business logic with zero web framework imports.

This package contains the core business logic for user registration:
input validation, localized messages, credential hashing, activation
tokens and the registration service. It defines its own port interfaces
for infrastructure abstraction.
"""

from .exceptions import (
    EmailInUse,
    NotificationDispatchError,
    PersistenceError,
    RegistrationError,
    ValidationFailed,
)
from .messages import ErrorKey, resolve_locale, translate
from .models import RegistrationRequest, RegistrationResult, User
from .ports import ActivationNotifier, UserRepository
from .registration import RegistrationService
from .validation import ValidationResult, validate

__all__ = [
    "ActivationNotifier",
    "EmailInUse",
    "ErrorKey",
    "NotificationDispatchError",
    "PersistenceError",
    "RegistrationError",
    "RegistrationRequest",
    "RegistrationResult",
    "RegistrationService",
    "User",
    "UserRepository",
    "ValidationFailed",
    "ValidationResult",
    "resolve_locale",
    "translate",
    "validate",
]
