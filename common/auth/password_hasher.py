"""
bcrypt password hashing.

Passwords are pre-hashed with SHA-256 before bcrypt to get around bcrypt's
72-byte input limit. Hashes made from the raw plaintext (records imported
from older deployments) still verify.

Example:
    hasher = PasswordHasher(rounds=10)

    password_hash = await hasher.hash("correct horse battery")
    assert await hasher.verify("correct horse battery", password_hash)
"""

import asyncio
import base64
import hashlib

import bcrypt as bcrypt_lib

from common.auth.exceptions import HashingError


class PasswordHasher:
    """One-way salted password hashing with bcrypt."""

    def __init__(self, rounds: int = 10):
        """
        Initialize the hasher.

        Args:
            rounds: bcrypt cost factor (2^rounds iterations)
        """
        self._rounds = rounds

    @staticmethod
    def _prehash_password(password: str) -> str:
        sha256_hash = hashlib.sha256(password.encode("utf-8")).digest()
        return base64.b64encode(sha256_hash).decode("utf-8")

    def _hash_sync(self, password: str) -> str:
        prehashed = self._prehash_password(password)
        try:
            salt = bcrypt_lib.gensalt(rounds=self._rounds)
            return bcrypt_lib.hashpw(prehashed.encode("utf-8"), salt).decode("utf-8")
        except (ValueError, TypeError, OSError) as e:
            raise HashingError(f"Failed to hash password: {e}") from e

    def _verify_sync(self, password: str, hashed: str) -> bool:
        try:
            hashed_bytes = hashed.encode("utf-8")
        except (AttributeError, UnicodeError):
            return False

        prehashed = self._prehash_password(password)
        try:
            if bcrypt_lib.checkpw(prehashed.encode("utf-8"), hashed_bytes):
                return True
        except ValueError:
            return False

        # Legacy hashes were made from the raw plaintext
        try:
            return bcrypt_lib.checkpw(password.encode("utf-8"), hashed_bytes)
        except ValueError:
            # Password too long for direct bcrypt - definitely not a match
            return False

    async def hash(self, password: str) -> str:
        """
        Hash a password with a fresh salt.

        Raises:
            HashingError: If bcrypt or the entropy source fails
        """
        return await asyncio.to_thread(self._hash_sync, password)

    async def verify(self, password: str, hashed: str) -> bool:
        """Check a password against a stored hash. Never raises on mismatch."""
        return await asyncio.to_thread(self._verify_sync, password, hashed)
