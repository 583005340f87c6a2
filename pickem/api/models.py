"""
API request and response models.

Pydantic models for response serialization and OpenAPI schema generation.
The signup body is validated by the domain pipeline, not by a request model,
so that errors keep the ``{code, reason, message, location}`` shape.
"""

from pydantic import BaseModel, ConfigDict, Field


class UserResponse(BaseModel):
    """Public projection of a user."""

    model_config = ConfigDict(from_attributes=True)

    username: str
    name: str
    points: int = 0
    picks: dict[str, str] = Field(default_factory=dict)


class SignupRequest(BaseModel):
    """Documented shape of the signup body (OpenAPI only)."""

    username: str = Field(..., description="1-17 characters, no surrounding whitespace")
    password: str = Field(..., description="5-72 characters, no surrounding whitespace")
    name: str = Field(..., description="At most 17 characters")


class TokenResponse(BaseModel):
    """Bearer token issued by login or refresh."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int


class ValidationErrorResponse(BaseModel):
    """422 body."""

    code: int = 422
    reason: str = "ValidationError"
    message: str
    location: str


class ErrorResponse(BaseModel):
    """401 and 500 body."""

    code: int
    message: str
