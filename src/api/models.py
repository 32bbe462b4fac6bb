"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.

Email format and password strength are deliberately NOT validated here:
they are business outcomes of the domain service, reported in the
response body with their catalog message rather than as a 422.
"""

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """Request model for account registration."""

    first_name: str = Field(..., description="Account holder's first name")
    email: str = Field(..., description="Email address, used as login")
    phone: str = Field("", description="Phone number")
    password: str = Field(..., description="Password (8+ chars, upper, lower and digit)")


class LoginRequest(BaseModel):
    """Request model for credential check."""

    email: str
    password: str


class ForgotPasswordRequest(BaseModel):
    """Request model for reset code issuance."""

    email: str


class VerifyResetCodeRequest(BaseModel):
    """Request model for reset code verification."""

    email: str
    reset_code: str = Field(..., description="6-digit code received by email")


class ResetPasswordRequest(BaseModel):
    """Request model for password reset."""

    email: str
    reset_code: str = Field(..., description="6-digit code received by email")
    new_password: str


class AuthResponse(BaseModel):
    """Uniform response for every authentication endpoint."""

    success: bool
    message: str
    token: str | None = None


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
