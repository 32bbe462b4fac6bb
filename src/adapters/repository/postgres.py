"""
PostgreSQL repository adapter - Implements AccountRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Consistency Design:
------------------
The domain's register flow checks for an existing email before inserting,
which is not atomic. The UNIQUE constraint on accounts.email is the real
guard: a concurrent insert that loses the race raises UniqueViolation,
which is translated here into the domain's EmailAlreadyExists.

Driver connection errors are translated into StoreUnavailable so that
callers never see psycopg types.
"""

import logging
from pathlib import Path

import psycopg
from psycopg.errors import UniqueViolation
from psycopg.rows import class_row
from psycopg_pool import ConnectionPool, PoolTimeout

from src.domain.exceptions import EmailAlreadyExists, StoreUnavailable
from src.domain.ports import Account

logger = logging.getLogger(__name__)

_ACCOUNT_COLUMNS = (
    "id, first_name, email, phone, password_hash, reset_code, created_at, updated_at"
)


class PostgresAccountRepository:
    """
    Implements AccountRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def find_by_email(self, email: str) -> Account | None:
        sql = f"SELECT {_ACCOUNT_COLUMNS} FROM accounts WHERE email = %s"
        return self._fetch_one(sql, (email,))

    def find_by_phone(self, phone: str) -> Account | None:
        sql = f"SELECT {_ACCOUNT_COLUMNS} FROM accounts WHERE phone = %s LIMIT 1"
        return self._fetch_one(sql, (phone,))

    def find_by_email_and_reset_code(self, email: str, code: str) -> Account | None:
        """
        Fetch account matching both email and active reset code.

        NULL reset_code never equals a parameter in SQL, so accounts
        without an active code cannot match.
        """
        sql = f"SELECT {_ACCOUNT_COLUMNS} FROM accounts WHERE email = %s AND reset_code = %s"
        return self._fetch_one(sql, (email, code))

    def insert(self, account: Account) -> int:
        """
        Insert a new account row.

        Args:
            account: Account to persist (id ignored, assigned by database)

        Returns:
            Database-assigned account id

        Raises:
            EmailAlreadyExists: UNIQUE constraint on email rejected the row
            StoreUnavailable: Database unreachable
        """
        sql = """
            INSERT INTO accounts (first_name, email, phone, password_hash, reset_code, created_at, updated_at)
            VALUES (%s, %s, %s, %s, %s, NOW(), NOW())
            RETURNING id
        """
        params = (
            account.first_name,
            account.email,
            account.phone,
            account.password_hash,
            account.reset_code,
        )

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, params)
                row = cursor.fetchone()
                conn.commit()
        except UniqueViolation as e:
            raise EmailAlreadyExists(account.email) from e
        except (psycopg.OperationalError, PoolTimeout) as e:
            raise StoreUnavailable("Account store unavailable") from e

        account.id = row[0]
        return account.id

    def update(self, account: Account) -> None:
        """
        Persist mutable fields (password_hash, reset_code) of an account.

        Rows are addressed by email, the logical key. An update that matches no row is logged as a warning, not raised:
        the account was removed or its email changed since it was read.
        """
        sql = """
            UPDATE accounts
            SET password_hash = %s, reset_code = %s, updated_at = NOW()
            WHERE email = %s
        """

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (account.password_hash, account.reset_code, account.email))
                matched = cursor.rowcount
                conn.commit()
        except (psycopg.OperationalError, PoolTimeout) as e:
            raise StoreUnavailable("Account store unavailable") from e

        if matched == 0:
            logger.warning("Update matched no account: %s", account.email)

    def _fetch_one(self, sql: str, params: tuple) -> Account | None:
        try:
            with self._pool.connection() as conn, conn.cursor(row_factory=class_row(Account)) as cursor:
                cursor.execute(sql, params)
                return cursor.fetchone()
        except (psycopg.OperationalError, PoolTimeout) as e:
            raise StoreUnavailable("Account store unavailable") from e


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
