"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- An in-memory AccountRepository with database-like copy semantics
- A recording EmailSender
- A fully wired AuthService
"""

import random
import threading
from dataclasses import replace

import pytest

from src.domain.authentication import AuthService
from src.domain.exceptions import EmailAlreadyExists
from src.domain.hashing import Sha256PasswordHasher
from src.domain.ports import Account


class InMemoryAccountRepository:
    """
    AccountRepository fake keyed by email.

    Returns copies so that, as with a real database, changes made by the
    caller are only visible after update().
    """

    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def find_by_email(self, email: str) -> Account | None:
        account = self._accounts.get(email)
        return replace(account) if account else None

    def find_by_phone(self, phone: str) -> Account | None:
        for account in self._accounts.values():
            if account.phone == phone:
                return replace(account)
        return None

    def find_by_email_and_reset_code(self, email: str, code: str) -> Account | None:
        account = self._accounts.get(email)
        if account is None or account.reset_code is None or account.reset_code != code:
            return None
        return replace(account)

    def insert(self, account: Account) -> int:
        with self._lock:
            if account.email in self._accounts:
                raise EmailAlreadyExists(account.email)
            stored = replace(account, id=self._next_id)
            self._accounts[account.email] = stored
            self._next_id += 1
        return stored.id

    def update(self, account: Account) -> None:
        stored = self._accounts[account.email]
        self._accounts[account.email] = replace(
            stored, password_hash=account.password_hash, reset_code=account.reset_code
        )

    def get(self, email: str) -> Account | None:
        """Test helper: peek at the stored row."""
        return self._accounts.get(email)


class RecordingEmailSender:
    """EmailSender fake that records every message."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []

    def send(self, to_address: str, subject: str, html_body: str) -> None:
        self.sent.append((to_address, subject, html_body))


@pytest.fixture
def repository() -> InMemoryAccountRepository:
    return InMemoryAccountRepository()


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def hasher() -> Sha256PasswordHasher:
    return Sha256PasswordHasher()


@pytest.fixture
def service(
    repository: InMemoryAccountRepository,
    email_sender: RecordingEmailSender,
    hasher: Sha256PasswordHasher,
) -> AuthService:
    """AuthService over in-memory fakes with a seeded random generator."""
    return AuthService(
        repository=repository,
        email_sender=email_sender,
        hasher=hasher,
        rng=random.Random(1234),
    )
