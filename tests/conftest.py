"""Shared test fixtures for Classbook backend tests."""

import asyncio
import time
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from common.auth import PasswordHasher, TokenIssuer
from classbook.auth.services.session_manager import SessionManager
from classbook.config import Settings
from classbook.dependencies import init_all_services

TEST_SECRET = "test-secret-do-not-use"


class FakeClock:
    """Settable clock returning seconds since epoch."""

    def __init__(self, now: float):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def sample_user_id():
    return str(ObjectId())


@pytest.fixture
def test_settings():
    return Settings(
        JWT_SECRET=TEST_SECRET,
        BCRYPT_ROUNDS=4,
        MONGODB_URI="mongodb://localhost:27017",
        MONGODB_DATABASE="classbook_test",
    )


@pytest.fixture
def clock():
    return FakeClock(time.time())


@pytest.fixture
def jwt_secret():
    return TEST_SECRET


@pytest.fixture
def token_issuer():
    return TokenIssuer(secret=TEST_SECRET, access_token_expire_minutes=15)


@pytest.fixture
def password_hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def hash_password(password_hasher):
    """Hash a password synchronously, for building stored user documents."""
    def _hash(password: str) -> str:
        return asyncio.run(password_hasher.hash(password))
    return _hash


@pytest.fixture
def mock_collection():
    collection = AsyncMock()
    # Motor's find() returns a cursor synchronously (not a coroutine),
    # so use MagicMock for it. Async methods like find_one, insert_one,
    # update_one etc. stay as AsyncMock.
    collection.find = MagicMock()
    collection.update_one.return_value = MagicMock(matched_count=1, modified_count=1)
    return collection


@pytest.fixture
def mock_db(mock_collection):
    db = MagicMock()
    db.__getitem__ = MagicMock(return_value=mock_collection)
    return db


@pytest.fixture
def sample_user_doc(sample_user_id):
    return {
        "_id": ObjectId(sample_user_id),
        "email": "teacher@school.org",
        "password": "$2b$04$placeholderplaceholderplaceholderplaceholderpl",
        "sessions": [],
    }


@pytest.fixture
def client(mock_db, test_settings, token_issuer, clock):
    """App client wired to the mock database. The lifespan is not run."""
    from api import app

    session_manager = SessionManager(db=mock_db, token_issuer=token_issuer, clock=clock)
    init_all_services(
        db=mock_db,
        settings=test_settings,
        token_issuer=token_issuer,
        session_manager=session_manager,
    )
    return TestClient(app)


@pytest.fixture
def access_headers(token_issuer, sample_user_id):
    token, _ = asyncio.run(token_issuer.issue_access_token(sample_user_id))
    return {"x-access-token": token}
