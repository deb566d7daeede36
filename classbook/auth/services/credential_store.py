"""
Credential store for user accounts.

One document per user in the ``users`` collection:

    {
        "_id": ObjectId,
        "email": str,
        "password": str,        # bcrypt hash
        "sessions": [{"token": str, "expiresAt": float}],
    }
"""

import logging
import secrets
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from common.auth.exceptions import HashingError
from common.auth.password_hasher import PasswordHasher
from common.utils.exceptions import InternalServerException
from common.utils.password import validate_password
from classbook.auth.exceptions import (
    ValidationError,
    InvalidCredentialsError,
    PersistenceError,
)

logger = logging.getLogger(__name__)


def to_object_id(value: Optional[str]) -> Optional[ObjectId]:
    """Parse an ObjectId string, returning None when it is malformed."""
    if not value:
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


class CredentialStore:
    """
    Creates and looks up user records and verifies their passwords.
    """

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        password_hasher: PasswordHasher,
        min_password_length: int = 8,
    ):
        """
        Initialize CredentialStore.

        Args:
            db: MongoDB database connection
            password_hasher: Hashes and verifies plaintext passwords
            min_password_length: Shortest accepted plaintext password
        """
        self._db = db
        self._password_hasher = password_hasher
        self._min_password_length = min_password_length
        self._users_collection = db["users"]
        self._dummy_hash: Optional[str] = None

    async def ensure_indexes(self) -> None:
        """Create the unique email index."""
        await self._users_collection.create_index("email", unique=True)

    @staticmethod
    def to_public(user: dict) -> dict:
        """External representation of a user: never the hash or sessions."""
        return {
            "_id": str(user["_id"]),
            "email": user.get("email"),
        }

    def _validate_password(self, password: str) -> None:
        is_valid, errors = validate_password(password, min_length=self._min_password_length)
        if not is_valid:
            raise ValidationError(message=errors[0], code="INVALID_PASSWORD")

    async def _hash(self, password: str) -> str:
        try:
            return await self._password_hasher.hash(password)
        except HashingError as e:
            logger.error(f"Password hashing failed: {e}")
            raise InternalServerException(message="Failed to hash password", code="HASHING_FAILED")

    async def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = await self._hash(secrets.token_hex(16))
        return self._dummy_hash

    async def create_user(self, email: str, password: str) -> dict:
        """
        Create a new user record.

        Args:
            email: User's email address (stored trimmed)
            password: Plaintext password, at least min_password_length long

        Returns:
            Created user document

        Raises:
            ValidationError: Blank email, short password or email already registered
            PersistenceError: The store could not be reached
        """
        email = (email or "").strip()
        if not email:
            raise ValidationError(message="Email is required", code="INVALID_EMAIL")

        self._validate_password(password)

        try:
            existing = await self._users_collection.find_one({"email": email}, {"_id": 1})
        except PyMongoError as e:
            logger.error(f"User lookup by email failed: {e}")
            raise PersistenceError()

        if existing:
            raise ValidationError(
                message="An account with this email already exists",
                code="EMAIL_TAKEN"
            )

        user_doc = {
            "email": email,
            "password": await self._hash(password),
            "sessions": [],
        }

        try:
            result = await self._users_collection.insert_one(user_doc)
        except DuplicateKeyError:
            # Lost a race with a concurrent signup for the same email
            raise ValidationError(
                message="An account with this email already exists",
                code="EMAIL_TAKEN"
            )
        except PyMongoError as e:
            logger.error(f"User insert failed: {e}")
            raise PersistenceError()

        user_doc["_id"] = result.inserted_id
        logger.info(f"User created: {result.inserted_id}")
        return user_doc

    async def find_by_credentials(self, email: str, password: str) -> dict:
        """
        Look up a user by email and check the password.

        Returns:
            The user document

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
            PersistenceError: The store could not be reached
        """
        email = (email or "").strip()
        if not email or not password:
            raise InvalidCredentialsError()

        try:
            user = await self._users_collection.find_one({"email": email})
        except PyMongoError as e:
            logger.error(f"User lookup by email failed: {e}")
            raise PersistenceError()

        if not user or not user.get("password"):
            # Unknown emails pay the same bcrypt verify as a wrong password
            await self._password_hasher.verify(password, await self._get_dummy_hash())
            raise InvalidCredentialsError()

        if not await self._password_hasher.verify(password, user["password"]):
            raise InvalidCredentialsError()

        return user

    async def get_user_by_id(self, user_id: str) -> Optional[dict]:
        """
        Get a user by ID.

        Returns:
            User document, or None if the ID is malformed or unknown
        """
        oid = to_object_id(user_id)
        if oid is None:
            return None

        try:
            return await self._users_collection.find_one({"_id": oid})
        except PyMongoError as e:
            logger.error(f"User lookup by id failed: {e}")
            raise PersistenceError()

    async def update_password(self, user_id: str, new_password: str) -> None:
        """
        Replace a user's password. Always re-hashes.

        Raises:
            ValidationError: New password too short
            InvalidCredentialsError: No such user
            PersistenceError: The store could not be reached
        """
        self._validate_password(new_password)

        oid = to_object_id(user_id)
        if oid is None:
            raise InvalidCredentialsError(message="User not found", code="USER_NOT_FOUND")

        password_hash = await self._hash(new_password)

        try:
            result = await self._users_collection.update_one(
                {"_id": oid},
                {"$set": {"password": password_hash}}
            )
        except PyMongoError as e:
            logger.error(f"Password update failed for user {user_id}: {e}")
            raise PersistenceError()

        if result.matched_count == 0:
            raise InvalidCredentialsError(message="User not found", code="USER_NOT_FOUND")

        logger.info(f"Password updated for user {user_id}")
