"""
API v1 routes.

Defines REST endpoints for the Inflow authentication API.

Status convention: 200 on success, 400 on any business failure, except
forgot-password on an unknown email which returns 404. The body is an
AuthResponse in every case, so clients can always show the message.
"""

from fastapi import APIRouter, Depends, Response, status

from src.api.dependencies import get_auth_service
from src.api.models import (
    AuthResponse,
    ErrorResponse,
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    VerifyResetCodeRequest,
)
from src.domain.authentication import AuthService
from src.domain.ports import AuthResult

router = APIRouter(prefix="/auth", tags=["v1"])

_FAILURE_RESPONSES = {400: {"model": AuthResponse, "description": "Business rule rejected the request"}}


def _to_response(
    result: AuthResult, response: Response, failure_status: int = status.HTTP_400_BAD_REQUEST
) -> AuthResponse:
    if not result.success:
        response.status_code = failure_status
    return AuthResponse(success=result.success, message=result.message, token=result.token)


@router.post(
    "/register",
    response_model=AuthResponse,
    responses=_FAILURE_RESPONSES,
    summary="Register a new account",
    description="Create an account. Fails on malformed email, existing email or weak password.",
)
async def register(
    request_data: RegisterRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Register a new account.

    - **email**: Email address (must be unused)
    - **password**: 8+ characters with uppercase, lowercase and digit
    """
    result = service.register(
        request_data.first_name, request_data.email, request_data.phone, request_data.password
    )
    return _to_response(result, response)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses=_FAILURE_RESPONSES,
    summary="Check account credentials",
)
async def login(
    request_data: LoginRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Unknown email and wrong password return the same message."""
    result = service.login(request_data.email, request_data.password)
    return _to_response(result, response)


@router.post(
    "/forgot-password",
    response_model=AuthResponse,
    responses={
        404: {"model": AuthResponse, "description": "Email not found"},
        502: {"model": ErrorResponse, "description": "Reset code stored but email delivery failed"},
    },
    summary="Send a password reset code",
    description="Generate a 6-digit reset code, store it on the account and email it.",
)
async def forgot_password(
    request_data: ForgotPasswordRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    result = service.forgot_password(request_data.email)
    return _to_response(result, response, failure_status=status.HTTP_404_NOT_FOUND)


@router.post(
    "/verify-reset-code",
    response_model=AuthResponse,
    responses=_FAILURE_RESPONSES,
    summary="Verify a password reset code",
)
async def verify_reset_code(
    request_data: VerifyResetCodeRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Does not consume the code."""
    result = service.verify_reset_code(request_data.email, request_data.reset_code)
    return _to_response(result, response)


@router.post(
    "/reset-password",
    response_model=AuthResponse,
    responses=_FAILURE_RESPONSES,
    summary="Reset password with a reset code",
)
async def reset_password(
    request_data: ResetPasswordRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    result = service.reset_password(
        request_data.email, request_data.reset_code, request_data.new_password
    )
    return _to_response(result, response)
