"""
Integration tests for PostgresAccountRepository.

Tests repository operations against a real PostgreSQL database.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

import pytest
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresAccountRepository
from src.domain.exceptions import EmailAlreadyExists
from src.domain.ports import Account

pytestmark = pytest.mark.integration


def make_account(email: str = "ana@x.com", **kwargs) -> Account:
    defaults = dict(first_name="Ana", phone="0900000000", password_hash="hash")
    defaults.update(kwargs)
    return Account(email=email, **defaults)


class TestInsert:
    """Tests for insert method."""

    def test_insert_returns_id(self, pg_repository: PostgresAccountRepository) -> None:
        account = make_account()

        account_id = pg_repository.insert(account)

        assert isinstance(account_id, int)
        assert account.id == account_id

    def test_insert_duplicate_raises_email_already_exists(
        self, pg_repository: PostgresAccountRepository
    ) -> None:
        pg_repository.insert(make_account())

        with pytest.raises(EmailAlreadyExists):
            pg_repository.insert(make_account(first_name="Other"))

    def test_different_emails_get_different_ids(
        self, pg_repository: PostgresAccountRepository
    ) -> None:
        first = pg_repository.insert(make_account("a@x.com"))
        second = pg_repository.insert(make_account("b@x.com"))

        assert first != second


class TestFind:
    """Tests for lookup methods."""

    def test_find_by_email_round_trip(self, pg_repository: PostgresAccountRepository) -> None:
        pg_repository.insert(make_account())

        found = pg_repository.find_by_email("ana@x.com")

        assert found is not None
        assert found.first_name == "Ana"
        assert found.phone == "0900000000"
        assert found.password_hash == "hash"
        assert found.reset_code is None
        assert found.created_at is not None

    def test_find_by_email_missing(self, pg_repository: PostgresAccountRepository) -> None:
        assert pg_repository.find_by_email("ghost@x.com") is None

    def test_find_by_phone(self, pg_repository: PostgresAccountRepository) -> None:
        pg_repository.insert(make_account(phone="0911111111"))

        found = pg_repository.find_by_phone("0911111111")

        assert found is not None
        assert found.email == "ana@x.com"

    def test_find_by_email_and_reset_code(self, pg_repository: PostgresAccountRepository) -> None:
        pg_repository.insert(make_account(reset_code="123456"))

        assert pg_repository.find_by_email_and_reset_code("ana@x.com", "123456") is not None
        assert pg_repository.find_by_email_and_reset_code("ana@x.com", "654321") is None
        assert pg_repository.find_by_email_and_reset_code("ghost@x.com", "123456") is None

    def test_null_reset_code_never_matches(self, pg_repository: PostgresAccountRepository) -> None:
        pg_repository.insert(make_account())

        assert pg_repository.find_by_email_and_reset_code("ana@x.com", "") is None


class TestUpdate:
    """Tests for update method."""

    def test_update_persists_hash_and_code(self, pg_repository: PostgresAccountRepository) -> None:
        pg_repository.insert(make_account())
        account = pg_repository.find_by_email("ana@x.com")
        account.password_hash = "new-hash"
        account.reset_code = "111111"

        pg_repository.update(account)

        stored = pg_repository.find_by_email("ana@x.com")
        assert stored.password_hash == "new-hash"
        assert stored.reset_code == "111111"
        assert stored.updated_at >= stored.created_at

    def test_update_clears_code(self, pg_repository: PostgresAccountRepository) -> None:
        pg_repository.insert(make_account(reset_code="111111"))
        account = pg_repository.find_by_email("ana@x.com")
        account.reset_code = None

        pg_repository.update(account)

        assert pg_repository.find_by_email("ana@x.com").reset_code is None

    def test_update_unknown_account_logs_warning(
        self, pg_repository: PostgresAccountRepository, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Updating an account that was never stored warns and leaves the table empty."""
        with caplog.at_level(logging.WARNING, logger="src.adapters.repository.postgres"):
            pg_repository.update(make_account("ghost@x.com", reset_code="111111"))

        assert "Update matched no account: ghost@x.com" in caplog.text
        assert pg_repository.find_by_email("ghost@x.com") is None

    def test_matching_update_does_not_warn(
        self, pg_repository: PostgresAccountRepository, caplog: pytest.LogCaptureFixture
    ) -> None:
        pg_repository.insert(make_account())

        with caplog.at_level(logging.WARNING, logger="src.adapters.repository.postgres"):
            pg_repository.update(make_account(password_hash="new-hash"))

        assert "Update matched no account" not in caplog.text


class TestConcurrentInserts:
    """Tests for concurrent registration of the same email."""

    def test_many_concurrent_inserts_exactly_one_succeeds(self, pool: ConnectionPool) -> None:
        """The UNIQUE constraint admits exactly one row."""

        def insert() -> bool:
            repo = PostgresAccountRepository(pool)
            try:
                repo.insert(make_account("race@x.com"))
            except EmailAlreadyExists:
                return False
            return True

        with ThreadPoolExecutor(max_workers=10) as executor:
            results = [f.result() for f in [executor.submit(insert) for _ in range(10)]]

        assert results.count(True) == 1
        assert results.count(False) == 9


class TestParameterizedQueries:
    """Tests verifying parameterized queries prevent SQL injection."""

    def test_email_with_special_characters(
        self, pg_repository: PostgresAccountRepository
    ) -> None:
        malicious_email = "user'; DROP TABLE accounts; --@example.com"

        pg_repository.insert(make_account(malicious_email))

        assert pg_repository.find_by_email(malicious_email) is not None
