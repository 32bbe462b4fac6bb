"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure, plus the value types that cross those ports.
Adapters implement these protocols.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Protocol

from .messages import AuthMessageKey


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Account:
    """
    Persisted identity record.

    Invariants:
    - email is unique across all accounts (store UNIQUE constraint)
    - password_hash is hasher output, never the plaintext
    - reset_code is None except during an active reset window
    """

    first_name: str
    email: str
    phone: str
    password_hash: str
    reset_code: str | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class AuthResult:
    """
    Uniform outcome of every authentication operation.

    The token field is reserved; no operation issues one.
    """

    success: bool
    key: AuthMessageKey
    message: str
    token: str | None = None


class AccountRepository(Protocol):
    """Port interface for account persistence."""

    def find_by_email(self, email: str) -> Account | None:
        """Return the account registered under email, or None."""
        ...

    def find_by_phone(self, phone: str) -> Account | None:
        """Return the account registered under phone, or None."""
        ...

    def find_by_email_and_reset_code(self, email: str, code: str) -> Account | None:
        """
        Return the account whose email AND active reset code both match.

        Code comparison is exact and case-sensitive. An account without
        an active code never matches.
        """
        ...

    def insert(self, account: Account) -> int:
        """
        Persist a new account.

        Args:
            account: Account to insert (id is ignored)

        Returns:
            Store-assigned account identifier

        Raises:
            EmailAlreadyExists: If the email unique constraint rejects the row
        """
        ...

    def update(self, account: Account) -> None:
        """Persist password_hash and reset_code changes for an existing account."""
        ...


class EmailSender(Protocol):
    """Port interface for email delivery."""

    def send(self, to_address: str, subject: str, html_body: str) -> None:
        """
        Deliver an HTML message.

        Args:
            to_address: Recipient email address
            subject: Message subject
            html_body: HTML message body

        Raises:
            NotificationError: If delivery fails
        """
        ...


class PasswordHasher(Protocol):
    """Port interface for one-way password hashing."""

    def hash(self, plaintext: str) -> str:
        """Return a storable hash of plaintext."""
        ...

    def verify(self, plaintext: str, password_hash: str) -> bool:
        """Return True if plaintext produces password_hash."""
        ...
