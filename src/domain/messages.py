"""
Message catalog - Outcome keys and their display strings.

Outcome identity (the key) is decoupled from display text so that
business logic never compares or builds user-facing strings itself.
"""

from enum import Enum


class AuthMessageKey(str, Enum):
    """Closed set of authentication outcomes."""

    INVALID_EMAIL = "invalid_email"
    EMAIL_EXISTS = "email_exists"
    WEAK_PASSWORD = "weak_password"
    REGISTER_SUCCESS = "register_success"
    INVALID_CREDENTIALS = "invalid_credentials"
    EMAIL_NOT_FOUND = "email_not_found"
    RESET_CODE_SENT = "reset_code_sent"
    INVALID_RESET_CODE = "invalid_reset_code"
    VERIFY_SUCCESS = "verify_success"
    RESET_PASSWORD_SUCCESS = "reset_password_success"
    LOGIN_SUCCESS = "login_success"


_MESSAGES: dict[AuthMessageKey, str] = {
    AuthMessageKey.INVALID_EMAIL: "Invalid email format",
    AuthMessageKey.EMAIL_EXISTS: "Email already exists",
    AuthMessageKey.WEAK_PASSWORD: (
        "Password must have 8 characters, uppercase, lowercase and numbers"
    ),
    AuthMessageKey.REGISTER_SUCCESS: "Register success",
    AuthMessageKey.INVALID_CREDENTIALS: "Invalid credentials",
    AuthMessageKey.EMAIL_NOT_FOUND: "Email not found",
    AuthMessageKey.RESET_CODE_SENT: "Reset code sent to {email}",
    AuthMessageKey.INVALID_RESET_CODE: "Invalid reset code",
    AuthMessageKey.VERIFY_SUCCESS: "Validation successfully",
    AuthMessageKey.RESET_PASSWORD_SUCCESS: "Password reset successfully",
    AuthMessageKey.LOGIN_SUCCESS: "Login success",
}


def get_message(key: AuthMessageKey, **params: str) -> str:
    """
    Look up the display string for an outcome key.

    Args:
        key: Outcome key
        **params: Template parameters (RESET_CODE_SENT takes ``email``)

    Returns:
        Formatted display string
    """
    template = _MESSAGES[key]
    return template.format(**params) if params else template
