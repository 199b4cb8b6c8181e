"""
API 1.0 routes.

Defines REST endpoints for the user registration API.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_locale, get_registration_service
from src.api.models import (
    ErrorResponse,
    RegisterRequest,
    RegisterResponse,
    ValidationErrorResponse,
)
from src.domain.exceptions import PersistenceError, ValidationFailed
from src.domain.messages import ErrorKey, translate
from src.domain.registration import RegistrationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])


# Sync handler: FastAPI runs it in its thread pool, so bcrypt hashing
# never blocks the event loop.
@router.post(
    "/users",
    response_model=RegisterResponse,
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation error or e-mail in use"},
        500: {"model": ErrorResponse, "description": "User could not be stored"},
    },
    summary="Register a new user",
    description="Submit username, e-mail and password to create an account. "
    "An activation token is sent to the provided e-mail.",
)
def register(
    request_data: RegisterRequest,
    locale: str = Depends(get_locale),
    service: RegistrationService = Depends(get_registration_service),
) -> RegisterResponse | JSONResponse:
    """
    Register a new user and send an activation message.

    - **username**: 4 to 32 characters
    - **email**: Valid, unused e-mail address
    - **password**: At least 6 characters with uppercase, lowercase and a number

    Messages are localized using the Accept-Language header (en, es).
    """
    try:
        service.register(request_data.to_domain())
    except ValidationFailed as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"validationErrors": e.result.localized(locale)},
        )
    except PersistenceError:
        logger.exception("Registration aborted by store failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="User could not be stored",
        ) from None
    return RegisterResponse(message=translate(ErrorKey.REGISTRATION_SUCCESS, locale))
