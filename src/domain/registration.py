"""
Registration domain service - Account creation pipeline.

This module contains the core business logic for user registration.

Registration flow (strictly sequential, no internal retries)
============================================================

    Received
      -> Validating           (ValidationFailed: per-field error keys)
      -> CheckingUniqueness   (EmailInUse: email already registered)
      -> Persisting           (EmailInUse on unique-constraint race,
                               PersistenceError on any other store fault)
      -> Notifying            (best effort, bounded by a timeout)
      -> Succeeded

The uniqueness pre-check only runs when the email passed its syntax
rules, and its result is merged with the other field errors so the caller
sees every problem at once. The pre-check is advisory: the store's unique
constraint on email decides concurrent registrations.

Notification policy: a failed or timed-out activation dispatch does not
roll back the account. The user row is kept, the failure is logged, and
RegistrationResult.notification_sent is False so the message can be
re-sent out of band.
"""

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field

from .exceptions import ValidationFailed
from .messages import ErrorKey
from .models import RegistrationRequest, RegistrationResult, User
from .ports import ActivationNotifier, UserRepository
from .security import (
    DEFAULT_BCRYPT_COST,
    DEFAULT_TOKEN_LENGTH,
    generate_activation_token,
    hash_password,
)
from .validation import ValidationResult, validate

logger = logging.getLogger(__name__)

DEFAULT_MAX_IN_FLIGHT = 16


class DispatchPool:
    """
    Thread pool for activation sends that refuses work instead of queueing it.

    At most max_in_flight sends run at once, one per worker, so an accepted
    send always starts immediately. A slot is released when its send
    finishes or is cancelled; hung sends hold their slot until they return.
    """

    def __init__(self, max_in_flight: int = DEFAULT_MAX_IN_FLIGHT) -> None:
        self._executor = ThreadPoolExecutor(
            max_workers=max_in_flight, thread_name_prefix="activation-dispatch"
        )
        self._slots = threading.BoundedSemaphore(max_in_flight)

    def submit(self, fn: Callable[..., None], *args: object) -> Future | None:
        """Start fn(*args) on a free worker, or return None if all are busy."""
        if not self._slots.acquire(blocking=False):
            return None
        try:
            future = self._executor.submit(fn, *args)
        except RuntimeError:
            self._slots.release()
            raise
        future.add_done_callback(lambda _: self._slots.release())
        return future


# Shared by services built without an explicit pool.
_default_dispatch_pool = DispatchPool()


def check_email_available(
    repository: UserRepository, email: str, result: ValidationResult
) -> ValidationResult:
    """
    Merge the email uniqueness check into a validation result.

    Skipped when the email already failed a syntax rule, so syntax and
    uniqueness errors never both apply to the email field.
    """
    if "email" in result.errors:
        return result
    if repository.find_by_email(email) is not None:
        return result.with_error("email", ErrorKey.EMAIL_IN_USE)
    return result


@dataclass
class RegistrationService:
    """
    Domain service for user registration.

    Orchestrates validation, the uniqueness guard, password hashing,
    token generation, persistence and activation dispatch.
    """

    repository: UserRepository
    notifier: ActivationNotifier
    bcrypt_cost: int = DEFAULT_BCRYPT_COST
    token_length: int = DEFAULT_TOKEN_LENGTH
    notification_timeout: float = 5.0
    dispatch_pool: DispatchPool = field(default_factory=lambda: _default_dispatch_pool)

    def register(self, request: RegistrationRequest) -> RegistrationResult:
        """
        Register a new user and dispatch its activation message.

        Args:
            request: Candidate account as submitted

        Returns:
            RegistrationResult with the persisted user and dispatch outcome

        Raises:
            ValidationFailed: If any field is invalid or the email is in use
            EmailInUse: If a concurrent registration won the unique constraint
            PersistenceError: If the store fails for any other reason
        """
        result = check_email_available(self.repository, request.email, validate(request))
        if not result.valid:
            logger.info("Registration rejected: %s", ", ".join(result.errors))
            raise ValidationFailed(result)

        password_hash = hash_password(request.password, self.bcrypt_cost)
        token = generate_activation_token(self.token_length)

        user = self.repository.create(
            username=request.username,
            email=request.email,
            password_hash=password_hash,
            activation_token=token,
        )
        logger.info("User created: id=%s", user.id)

        notified = self._dispatch_activation(user)
        return RegistrationResult(user=user, notification_sent=notified)

    def _dispatch_activation(self, user: User) -> bool:
        """
        Send the activation message, waiting at most notification_timeout.

        Sends are skipped, not queued, while the dispatch pool is saturated.

        Returns:
            True if the notifier accepted the message in time
        """
        future = self.dispatch_pool.submit(
            self.notifier.send_activation, user.email, user.activation_token
        )
        if future is None:
            logger.warning("Activation dispatch skipped, pool saturated: user id=%s", user.id)
            return False
        try:
            future.result(timeout=self.notification_timeout)
        except FutureTimeoutError:
            future.cancel()
            logger.warning(
                "Activation dispatch timed out after %ss: user id=%s",
                self.notification_timeout,
                user.id,
            )
            return False
        except Exception as e:
            logger.warning("Activation dispatch failed: user id=%s - %s", user.id, e)
            return False
        return True
