"""
Session management for refresh tokens.

Manages session lifecycle within the User document's embedded sessions array.
"""

import logging
import time
from typing import Callable, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from common.auth.jwt_auth import TokenIssuer
from classbook.auth.exceptions import PersistenceError, SessionPersistError
from classbook.auth.services.credential_store import to_object_id

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 60 * 60 * 24


class SessionManager:
    """
    Handles refresh session operations.
    Sessions are stored as embedded array in user document.
    """

    DEFAULT_EXPIRATION_DAYS = 10

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        token_issuer: TokenIssuer,
        expiration_days: int = DEFAULT_EXPIRATION_DAYS,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize SessionManager.

        Args:
            db: MongoDB database connection
            token_issuer: Generates the opaque refresh tokens
            expiration_days: Session lifetime
            clock: Returns seconds since epoch; replaced in tests
        """
        self._db = db
        self._token_issuer = token_issuer
        self._expiration_seconds = expiration_days * SECONDS_PER_DAY
        self._clock = clock
        self._users_collection = db["users"]

    async def create_session(self, user: dict) -> str:
        """
        Create a new refresh session for a user.

        Args:
            user: User document (must carry ``_id``)

        Returns:
            The refresh token

        Raises:
            SessionPersistError: The session could not be written

        Side Effects:
            - Pushes {token, expiresAt} onto user.sessions[] atomically
            - Appends the session to the in-memory user document
        """
        token = self._token_issuer.issue_refresh_token()
        session = {
            "token": token,
            "expiresAt": self._clock() + self._expiration_seconds,
        }

        try:
            result = await self._users_collection.update_one(
                {"_id": user["_id"]},
                {"$push": {"sessions": session}}
            )
        except PyMongoError as e:
            logger.error(f"Failed to persist session for user {user['_id']}: {e}")
            raise SessionPersistError()

        if result.matched_count == 0:
            logger.error(f"Failed to persist session: user {user['_id']} not found")
            raise SessionPersistError()

        user.setdefault("sessions", []).append(session)
        logger.info(f"Session created for user {user['_id']}")
        return token

    async def find_user_by_session_token(
        self,
        user_id: str,
        token: str
    ) -> Optional[dict]:
        """
        Find the user that owns a refresh token.

        Args:
            user_id: User ID as presented by the client
            token: Refresh token as presented by the client

        Returns:
            User document, or None if the id/token pair does not exist.
            Expiry is not checked here.

        Raises:
            PersistenceError: The store could not be read
        """
        oid = to_object_id(user_id)
        if oid is None or not token:
            return None

        try:
            return await self._users_collection.find_one({
                "_id": oid,
                "sessions.token": token,
            })
        except PyMongoError as e:
            logger.error(f"Session lookup failed for user {user_id}: {e}")
            raise PersistenceError()

    def is_session_valid(self, session: dict) -> bool:
        """True iff the session expires strictly after now."""
        expires_at = session.get("expiresAt")
        if expires_at is None:
            return False
        return float(expires_at) > self._clock()

    def find_valid_session(self, user: dict, token: str) -> Optional[dict]:
        """
        Scan a user's sessions for an unexpired one with the given token.

        Returns:
            The matching session, or None
        """
        for session in user.get("sessions", []):
            if session.get("token") == token and self.is_session_valid(session):
                return session
        return None

    async def prune_expired_sessions(self, user_id: str) -> int:
        """
        Remove expired sessions from user.sessions[].

        Not part of the session lifecycle proper; only called when
        PRUNE_EXPIRED_SESSIONS is enabled.

        Returns:
            1 if the user record was modified, 0 otherwise
        """
        oid = to_object_id(user_id)
        if oid is None:
            return 0

        try:
            result = await self._users_collection.update_one(
                {"_id": oid},
                {"$pull": {"sessions": {"expiresAt": {"$lte": self._clock()}}}}
            )
        except PyMongoError as e:
            logger.error(f"Failed to prune sessions for user {user_id}: {e}")
            raise PersistenceError()

        if result.modified_count > 0:
            logger.info(f"Pruned expired sessions for user {user_id}")

        return result.modified_count
