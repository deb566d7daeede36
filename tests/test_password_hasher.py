"""Tests for bcrypt password hashing."""

import base64
import hashlib
from unittest.mock import patch

import bcrypt
import pytest

from common.auth import PasswordHasher, HashingError


class TestHash:
    @pytest.mark.asyncio
    async def test_hash_is_not_plaintext_and_uses_cost_factor(self):
        hasher = PasswordHasher(rounds=10)
        hashed = await hasher.hash("longenough")

        assert hashed != "longenough"
        assert hashed.startswith("$2b$10$")

    @pytest.mark.asyncio
    async def test_fresh_salt_per_call(self, password_hasher):
        first = await password_hasher.hash("longenough")
        second = await password_hasher.hash("longenough")

        assert first != second

    @pytest.mark.asyncio
    async def test_library_failure_raises_hashing_error(self, password_hasher):
        with patch("common.auth.password_hasher.bcrypt_lib.gensalt", side_effect=OSError("no entropy")):
            with pytest.raises(HashingError):
                await password_hasher.hash("longenough")


class TestVerify:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("password", ["longenough", "exactly8", "ünïcødé-pässwörd", "x" * 200])
    async def test_round_trip(self, password_hasher, password):
        hashed = await password_hasher.hash(password)
        assert await password_hasher.verify(password, hashed) is True

    @pytest.mark.asyncio
    async def test_wrong_password_is_false(self, password_hasher):
        hashed = await password_hasher.hash("longenough")
        assert await password_hasher.verify("notthesame", hashed) is False

    @pytest.mark.asyncio
    async def test_malformed_hash_is_false_not_error(self, password_hasher):
        assert await password_hasher.verify("longenough", "not-a-bcrypt-hash") is False
        assert await password_hasher.verify("longenough", "") is False

    @pytest.mark.asyncio
    async def test_legacy_plain_bcrypt_hash_still_verifies(self, password_hasher):
        legacy = bcrypt.hashpw(b"longenough", bcrypt.gensalt(rounds=4)).decode("utf-8")

        assert await password_hasher.verify("longenough", legacy) is True
        assert await password_hasher.verify("wrongpassword", legacy) is False

    @pytest.mark.asyncio
    async def test_prehashed_format(self, password_hasher):
        hashed = await password_hasher.hash("longenough")
        prehashed = base64.b64encode(hashlib.sha256(b"longenough").digest())

        assert bcrypt.checkpw(prehashed, hashed.encode("utf-8"))
