"""
Authentication domain service - Registration, login and password reset.

This module contains the core business logic of the service. Every
operation is a short decision pipeline over the inputs, the account
repository and the password hasher, returning an AuthResult.

Reset Code Lifecycle (per account)
==================================

    absent  -> present  (forgot_password)
    present -> present  (forgot_password again, new code overwrites old)
    present -> absent   (successful reset_password)

verify_reset_code is read-only and never consumes the code.

Concurrency
===========

Operations on the same account are not synchronized here. register's
existence check followed by insert is best effort only: the store's
unique constraint on email is what actually prevents duplicates, and a
lost race surfaces as EmailAlreadyExists from the repository.
"""

import logging
import random
import secrets
from dataclasses import dataclass, field
from functools import lru_cache

from .exceptions import EmailAlreadyExists, NotificationError, ResetCodeDeliveryFailed
from .messages import AuthMessageKey, get_message
from .ports import Account, AccountRepository, AuthResult, EmailSender, PasswordHasher
from .validation import is_strong_password, is_valid_email

logger = logging.getLogger(__name__)

RESET_CODE_MIN = 100000
RESET_CODE_MAX = 999999

RESET_EMAIL_SUBJECT = "Password Reset Code"
RESET_EMAIL_TEMPLATE = "Your reset code is: <b>{code}</b>"

# Hashed once per hasher and verified against on the unknown-email login path
_DUMMY_PASSWORD = "dummy_password_for_timing_safety"


@lru_cache(maxsize=8)
def _dummy_hash(hasher: PasswordHasher) -> str:
    return hasher.hash(_DUMMY_PASSWORD)


def _fail(key: AuthMessageKey) -> AuthResult:
    return AuthResult(success=False, key=key, message=get_message(key))


def _ok(key: AuthMessageKey, **params: str) -> AuthResult:
    return AuthResult(success=True, key=key, message=get_message(key, **params))


@dataclass
class AuthService:
    """
    Domain service for account authentication.

    Collaborators are injected so tests can substitute them: rng in
    particular accepts any random.Random, letting a seeded or stubbed
    generator fix the reset code.
    """

    repository: AccountRepository
    email_sender: EmailSender
    hasher: PasswordHasher
    rng: random.Random = field(default_factory=secrets.SystemRandom)
    enforce_reset_password_policy: bool = False

    def register(self, first_name: str, email: str, phone: str, password: str) -> AuthResult:
        """
        Register a new account.

        Checks run in a fixed order and short-circuit: email format,
        then email availability, then password strength. An invalid
        email never reaches the repository.

        Args:
            first_name: Account holder's first name
            email: Email address (logical unique key)
            phone: Phone number
            password: Plaintext password (hashed before storage)

        Returns:
            AuthResult with REGISTER_SUCCESS, INVALID_EMAIL,
            EMAIL_EXISTS or WEAK_PASSWORD
        """
        if not is_valid_email(email):
            return _fail(AuthMessageKey.INVALID_EMAIL)

        if self.repository.find_by_email(email) is not None:
            return _fail(AuthMessageKey.EMAIL_EXISTS)

        if not is_strong_password(password):
            return _fail(AuthMessageKey.WEAK_PASSWORD)

        account = Account(
            first_name=first_name,
            email=email,
            phone=phone,
            password_hash=self.hasher.hash(password),
        )
        try:
            self.repository.insert(account)
        except EmailAlreadyExists:
            logger.info("Concurrent registration lost unique constraint race: %s", email)
            return _fail(AuthMessageKey.EMAIL_EXISTS)

        logger.info("Account registered: %s", email)
        return _ok(AuthMessageKey.REGISTER_SUCCESS)

    def login(self, email: str, password: str) -> AuthResult:
        """
        Check credentials.

        Unknown email and wrong password yield the same INVALID_CREDENTIALS
        result. The hasher runs on both paths, against a dummy hash when the
        account is absent, so response time does not reveal whether the
        email is registered. No session token is issued.
        """
        account = self.repository.find_by_email(email)
        if account is None:
            self.hasher.verify(password, _dummy_hash(self.hasher))
            return _fail(AuthMessageKey.INVALID_CREDENTIALS)
        if not self.hasher.verify(password, account.password_hash):
            return _fail(AuthMessageKey.INVALID_CREDENTIALS)
        return _ok(AuthMessageKey.LOGIN_SUCCESS)

    def forgot_password(self, email: str) -> AuthResult:
        """
        Issue a 6-digit reset code and email it to the account.

        The code is persisted before the email is sent. If sending fails
        the update stays in place and ResetCodeDeliveryFailed is raised.

        Args:
            email: Account email

        Returns:
            AuthResult with RESET_CODE_SENT or EMAIL_NOT_FOUND

        Raises:
            ResetCodeDeliveryFailed: Code stored but email not delivered
        """
        account = self.repository.find_by_email(email)
        if account is None:
            return _fail(AuthMessageKey.EMAIL_NOT_FOUND)

        code = self._generate_reset_code()
        account.reset_code = code
        self.repository.update(account)

        try:
            self.email_sender.send(
                account.email,
                RESET_EMAIL_SUBJECT,
                RESET_EMAIL_TEMPLATE.format(code=code),
            )
        except NotificationError as e:
            logger.warning("Reset code stored but delivery failed: %s", account.email)
            raise ResetCodeDeliveryFailed(account.email) from e

        logger.info("Reset code issued: %s", account.email)
        return _ok(AuthMessageKey.RESET_CODE_SENT, email=email)

    def verify_reset_code(self, email: str, code: str) -> AuthResult:
        """Check an (email, code) pair without consuming the code."""
        if self.repository.find_by_email_and_reset_code(email, code) is None:
            return _fail(AuthMessageKey.INVALID_RESET_CODE)
        return _ok(AuthMessageKey.VERIFY_SUCCESS)

    def reset_password(self, email: str, code: str, new_password: str) -> AuthResult:
        """
        Replace the password of the account holding (email, code).

        Clears the reset code on success so it cannot be reused. The new
        password is only checked against the strength policy when
        enforce_reset_password_policy is set.

        Returns:
            AuthResult with RESET_PASSWORD_SUCCESS, INVALID_RESET_CODE
            or (policy enforced only) WEAK_PASSWORD
        """
        account = self.repository.find_by_email_and_reset_code(email, code)
        if account is None:
            return _fail(AuthMessageKey.INVALID_RESET_CODE)

        if self.enforce_reset_password_policy and not is_strong_password(new_password):
            return _fail(AuthMessageKey.WEAK_PASSWORD)

        account.password_hash = self.hasher.hash(new_password)
        account.reset_code = None
        self.repository.update(account)

        logger.info("Password reset: %s", account.email)
        return _ok(AuthMessageKey.RESET_PASSWORD_SUCCESS)

    def _generate_reset_code(self) -> str:
        """Draw a six-digit code (100000-999999, never a leading zero)."""
        return str(self.rng.randint(RESET_CODE_MIN, RESET_CODE_MAX))
