"""
Request guards for protected routes.

Two authenticators share the Authenticator interface; each route picks one.

- AccessTokenAuthenticator: verifies the ``x-access-token`` JWT. Stateless,
  never touches the database.
- RefreshSessionAuthenticator: checks the ``x-refresh-token`` + ``_id``
  pair against the user's persisted sessions. One read, no writes.
"""

import logging

from fastapi import Request

from common.auth.base import Authenticator, AuthContext
from common.auth.exceptions import InvalidTokenError, TokenExpiredError
from common.auth.jwt_auth import TokenIssuer
from classbook.auth.exceptions import AuthenticationError
from classbook.auth.services.session_manager import SessionManager

logger = logging.getLogger(__name__)

ACCESS_TOKEN_HEADER = "x-access-token"
REFRESH_TOKEN_HEADER = "x-refresh-token"
USER_ID_HEADER = "_id"


class AccessTokenAuthenticator(Authenticator):
    """
    Validates the access token and attaches the user id to the request.
    """

    def __init__(self, token_issuer: TokenIssuer):
        """
        Initialize AccessTokenAuthenticator.

        Args:
            token_issuer: For access token verification
        """
        self._token_issuer = token_issuer

    async def authenticate(self, request: Request) -> AuthContext:
        """
        Validate the request's access token.

        Raises:
            AuthenticationError: Header missing, token invalid or expired

        Side Effects:
            - Attaches user id to request.state.user_id
        """
        token = request.headers.get(ACCESS_TOKEN_HEADER)

        if not token:
            raise AuthenticationError(
                message="Access token required",
                code="ACCESS_TOKEN_REQUIRED"
            )

        try:
            user_id = await self._token_issuer.verify_access_token(token)
        except TokenExpiredError as e:
            raise AuthenticationError(message=str(e), code="ACCESS_TOKEN_EXPIRED")
        except InvalidTokenError as e:
            raise AuthenticationError(message=str(e), code="INVALID_ACCESS_TOKEN")

        request.state.user_id = user_id
        return AuthContext(user_id=user_id)


class RefreshSessionAuthenticator(Authenticator):
    """
    Validates a refresh session and attaches the user to the request.
    """

    def __init__(self, session_manager: SessionManager):
        """
        Initialize RefreshSessionAuthenticator.

        Args:
            session_manager: For session lookup and expiry checks
        """
        self._session_manager = session_manager

    async def authenticate(self, request: Request) -> AuthContext:
        """
        Validate the request's refresh token against the user's sessions.

        Raises:
            AuthenticationError: Headers missing, no such user/token pair,
                or the matching session has expired
            PersistenceError: The store could not be read

        Side Effects:
            - Attaches user_id, user and refresh_token to request.state
        """
        refresh_token = request.headers.get(REFRESH_TOKEN_HEADER)
        user_id = request.headers.get(USER_ID_HEADER)

        if not refresh_token or not user_id:
            raise AuthenticationError(
                message="Refresh token and user id are required",
                code="SESSION_CREDENTIALS_REQUIRED"
            )

        user = await self._session_manager.find_user_by_session_token(user_id, refresh_token)

        if not user:
            raise AuthenticationError(
                message="User not found. Make sure that the refresh token and user id are correct",
                code="SESSION_NOT_FOUND"
            )

        if not self._session_manager.find_valid_session(user, refresh_token):
            logger.info(f"Rejected expired refresh session for user {user_id}")
            raise AuthenticationError(
                message="Refresh token has expired or the session is invalid",
                code="SESSION_EXPIRED"
            )

        resolved_id = str(user["_id"])
        request.state.user_id = resolved_id
        request.state.user = user
        request.state.refresh_token = refresh_token

        return AuthContext(
            user_id=resolved_id,
            user=user,
            refresh_token=refresh_token,
        )
