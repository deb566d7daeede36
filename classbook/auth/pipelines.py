"""
Auth system pipeline functions.

Stateless orchestration logic for authentication flows.
"""

import logging

from common.auth.base import AuthContext
from common.auth.exceptions import TokenSigningError
from common.auth.jwt_auth import TokenIssuer
from common.utils.exceptions import InternalServerException
from classbook.auth.services.credential_store import CredentialStore
from classbook.auth.services.session_manager import SessionManager

logger = logging.getLogger(__name__)


async def _issue_access_token(token_issuer: TokenIssuer, user_id: str) -> str:
    try:
        token, _ = await token_issuer.issue_access_token(user_id)
    except TokenSigningError as e:
        logger.error(f"Access token signing failed for user {user_id}: {e}")
        raise InternalServerException(
            message="Failed to issue access token",
            code="TOKEN_SIGNING_FAILED"
        )
    return token


async def _start_session(
    session_manager: SessionManager,
    token_issuer: TokenIssuer,
    user: dict
) -> dict:
    refresh_token = await session_manager.create_session(user)
    access_token = await _issue_access_token(token_issuer, str(user["_id"]))

    return {
        "user": CredentialStore.to_public(user),
        "accessToken": access_token,
        "refreshToken": refresh_token,
    }


async def signup_pipeline(
    credential_store: CredentialStore,
    session_manager: SessionManager,
    token_issuer: TokenIssuer,
    email: str,
    password: str
) -> dict:
    """
    Orchestrates the signup flow.

    Args:
        credential_store: Creates the user record
        session_manager: Creates the refresh session
        token_issuer: Mints the access token
        email: New user's email
        password: New user's plaintext password

    Returns:
        dict with public user, accessToken and refreshToken

    Raises:
        ValidationError: Bad email/password or email already registered
        SessionPersistError: Session could not be stored
        InternalServerException: Access token could not be signed
    """
    user = await credential_store.create_user(email=email, password=password)
    result = await _start_session(session_manager, token_issuer, user)

    logger.info(f"User signed up: {user['_id']}")
    return result


async def login_pipeline(
    credential_store: CredentialStore,
    session_manager: SessionManager,
    token_issuer: TokenIssuer,
    email: str,
    password: str,
    prune_expired_sessions: bool = False
) -> dict:
    """
    Orchestrates the login flow.

    Args:
        credential_store: Verifies the credentials
        session_manager: Creates the refresh session
        token_issuer: Mints the access token
        email: User's email
        password: User's plaintext password
        prune_expired_sessions: Drop expired sessions before adding the new one

    Returns:
        dict with public user, accessToken and refreshToken

    Raises:
        InvalidCredentialsError: Unknown email or wrong password
        SessionPersistError: Session could not be stored
        InternalServerException: Access token could not be signed
    """
    user = await credential_store.find_by_credentials(email=email, password=password)

    if prune_expired_sessions:
        await session_manager.prune_expired_sessions(str(user["_id"]))

    result = await _start_session(session_manager, token_issuer, user)

    logger.info(f"User logged in: {user['_id']}")
    return result


async def refresh_access_token_pipeline(
    token_issuer: TokenIssuer,
    auth: AuthContext
) -> str:
    """
    Issue a fresh access token for a caller that passed the refresh-session guard.

    Returns:
        The new access token
    """
    return await _issue_access_token(token_issuer, auth.user_id)


async def update_password_pipeline(
    credential_store: CredentialStore,
    auth: AuthContext,
    new_password: str
) -> None:
    """
    Replace the caller's password.

    Raises:
        ValidationError: New password too short
    """
    await credential_store.update_password(auth.user_id, new_password)
