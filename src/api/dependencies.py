"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from functools import lru_cache

from fastapi import Depends, Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresAccountRepository
from src.adapters.smtp.console import ConsoleEmailSender
from src.adapters.smtp.sender import SmtpEmailSender
from src.config.settings import Settings, get_settings
from src.domain.authentication import AuthService
from src.domain.hashing import BcryptPasswordHasher, Sha256PasswordHasher
from src.domain.ports import EmailSender, PasswordHasher


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_repository(request: Request) -> PostgresAccountRepository:
    """Create repository with connection pool from app state."""
    pool = get_pool(request)
    return PostgresAccountRepository(pool)


def get_email_sender(settings: Settings = Depends(get_settings)) -> EmailSender:
    """Get the configured email sender (console by default)."""
    if settings.email_backend == "smtp":
        return SmtpEmailSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_username,
            password=settings.smtp_password,
            sender_email=settings.smtp_sender_email,
            sender_name=settings.smtp_sender_name,
            use_tls=settings.smtp_use_tls,
            timeout=settings.smtp_timeout_seconds,
        )
    return ConsoleEmailSender()


@lru_cache
def _build_password_hasher(name: str, rounds: int) -> PasswordHasher:
    if name == "bcrypt":
        return BcryptPasswordHasher(rounds=rounds)
    return Sha256PasswordHasher()


def get_password_hasher(settings: Settings = Depends(get_settings)) -> PasswordHasher:
    """
    Get the configured password hasher.

    One instance per (algorithm, cost) pair, so its login dummy hash is
    computed once per process rather than per request.
    """
    return _build_password_hasher(settings.password_hasher, settings.bcrypt_cost)


def get_auth_service(
    repository: PostgresAccountRepository = Depends(get_repository),
    email_sender: EmailSender = Depends(get_email_sender),
    hasher: PasswordHasher = Depends(get_password_hasher),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    """
    Create authentication service with injected dependencies.

    Wires together the repository, email sender and hasher for the domain service.
    """
    return AuthService(
        repository=repository,
        email_sender=email_sender,
        hasher=hasher,
        enforce_reset_password_policy=settings.enforce_reset_password_policy,
    )
