"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Field rules live in the domain validator, so the request model accepts
missing and null values and leaves them for the validator to report.
"""

from pydantic import BaseModel, ConfigDict, Field

from src.domain.models import RegistrationRequest


class RegisterRequest(BaseModel):
    """Request model for user registration."""

    model_config = ConfigDict(extra="ignore")

    username: str | None = Field(default=None, description="Username (4-32 characters)")
    email: str | None = Field(default=None, description="E-mail address")
    password: str | None = Field(
        default=None,
        description="Password (min 6 characters, with uppercase, lowercase and a number)",
    )

    def to_domain(self) -> RegistrationRequest:
        return RegistrationRequest(
            username=self.username,
            email=self.email,
            password=self.password,
        )


class RegisterResponse(BaseModel):
    """Response model for successful registration."""

    message: str


class ValidationErrorResponse(BaseModel):
    """Field-scoped validation errors, in username/email/password order."""

    validationErrors: dict[str, str]


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
