"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for account
authentication. It defines its own port interfaces for infrastructure
abstraction, ensuring true hexagonal architecture decoupling.
"""

from .authentication import AuthService
from .exceptions import (
    AuthError,
    EmailAlreadyExists,
    NotificationError,
    OperationalError,
    ResetCodeDeliveryFailed,
    StoreUnavailable,
)
from .hashing import BcryptPasswordHasher, Sha256PasswordHasher
from .messages import AuthMessageKey, get_message
from .ports import Account, AccountRepository, AuthResult, EmailSender, PasswordHasher

__all__ = [
    "Account",
    "AccountRepository",
    "AuthError",
    "AuthMessageKey",
    "AuthResult",
    "AuthService",
    "BcryptPasswordHasher",
    "EmailAlreadyExists",
    "EmailSender",
    "NotificationError",
    "OperationalError",
    "PasswordHasher",
    "ResetCodeDeliveryFailed",
    "Sha256PasswordHasher",
    "StoreUnavailable",
    "get_message",
]
