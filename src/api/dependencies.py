"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Header, Request

from src.adapters.smtp.console import ConsoleActivationNotifier
from src.config.settings import get_settings
from src.domain.messages import resolve_locale
from src.domain.ports import ActivationNotifier, UserRepository
from src.domain.registration import DispatchPool, RegistrationService

# Module-level singleton - ConsoleActivationNotifier is stateless
_notifier = ConsoleActivationNotifier()


@lru_cache
def get_dispatch_pool() -> DispatchPool:
    """Get the process-wide activation dispatch pool (sized from settings)."""
    return DispatchPool(get_settings().notification_max_in_flight)


def get_repository(request: Request) -> UserRepository:
    """
    Get the user repository from app state.

    The repository is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.repository


def get_notifier(request: Request) -> ActivationNotifier:
    """Get the activation notifier (app state override, else console singleton)."""
    return getattr(request.app.state, "notifier", None) or _notifier


def get_registration_service(request: Request) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the repository, notifier and security settings.
    """
    settings = get_settings()
    return RegistrationService(
        repository=get_repository(request),
        notifier=get_notifier(request),
        bcrypt_cost=settings.bcrypt_cost,
        token_length=settings.activation_token_length,
        notification_timeout=settings.notification_timeout_seconds,
        dispatch_pool=get_dispatch_pool(),
    )


def get_locale(
    accept_language: Annotated[str | None, Header()] = None,
) -> str:
    """Resolve the response locale from the Accept-Language header."""
    return resolve_locale(accept_language, get_settings().default_locale)
