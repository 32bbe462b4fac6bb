"""
Password hashers - Implementations of the PasswordHasher port.

Sha256PasswordHasher reproduces the stored-hash format of existing
accounts: base64 of an unsalted SHA-256 digest. It is deterministic,
which makes it fast and weak against precomputed tables.

BcryptPasswordHasher is the salted, adaptive alternative. Switching an
existing deployment to it invalidates every stored SHA-256 hash, so
the choice is made once per deployment via settings.
"""

import base64
import hashlib
import secrets

import bcrypt


class Sha256PasswordHasher:
    """Deterministic base64(SHA-256(utf-8 plaintext)) hasher."""

    def hash(self, plaintext: str) -> str:
        digest = hashlib.sha256(plaintext.encode("utf-8")).digest()
        return base64.b64encode(digest).decode("ascii")

    def verify(self, plaintext: str, password_hash: str) -> bool:
        """Exact, case-sensitive match using constant-time comparison."""
        return secrets.compare_digest(
            self.hash(plaintext).encode("ascii"), password_hash.encode("utf-8")
        )


class BcryptPasswordHasher:
    """
    Salted bcrypt hasher with configurable cost factor.

    bcrypt only reads the first 72 bytes of its input. Longer passwords
    are first reduced to base64(SHA-256(utf-8 plaintext)), 44 bytes, so
    every byte still counts and hashpw never sees an oversized input.
    """

    MAX_INPUT_BYTES = 72

    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds

    def _prepare(self, plaintext: str) -> bytes:
        encoded = plaintext.encode("utf-8")
        if len(encoded) > self.MAX_INPUT_BYTES:
            return base64.b64encode(hashlib.sha256(encoded).digest())
        return encoded

    def hash(self, plaintext: str) -> str:
        return bcrypt.hashpw(self._prepare(plaintext), bcrypt.gensalt(rounds=self._rounds)).decode()

    def verify(self, plaintext: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(self._prepare(plaintext), password_hash.encode())
        except ValueError:
            # Stored value is not a bcrypt hash (e.g. legacy SHA-256 row)
            return False
