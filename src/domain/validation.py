"""
Input validation rules for registration.

Pure functions, no network I/O. Emails are checked exactly as given:
callers that want trimming or case folding must do it before calling.
"""

import string

from email_validator import EmailNotValidError, validate_email

MIN_PASSWORD_LENGTH = 8


def is_valid_email(email: str) -> bool:
    """
    Check email is a syntactically valid addr-spec.

    Syntax only (no DNS lookup). The domain must contain a dot, and
    whitespace anywhere in the input is rejected, including around it.
    """
    if any(c.isspace() for c in email):
        return False
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_strong_password(password: str) -> bool:
    """
    Check password against the registration policy.

    Requires length >= 8 and at least one ASCII uppercase letter,
    one ASCII lowercase letter and one decimal digit. No special
    character requirement and no maximum length.
    """
    return (
        len(password) >= MIN_PASSWORD_LENGTH
        and any(c in string.ascii_uppercase for c in password)
        and any(c in string.ascii_lowercase for c in password)
        and any(c in string.digits for c in password)
    )
