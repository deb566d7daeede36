"""
JWT access tokens and opaque refresh tokens.

Access tokens are short-lived, signed with a symmetric secret and verified
without any storage lookup. Refresh tokens are random hex strings; they carry
no claims and are only meaningful once persisted by a session store.

Example:
    issuer = TokenIssuer(
        secret="your-secret-key",
        access_token_expire_minutes=15,
    )

    token, expires_at = await issuer.issue_access_token(user_id)
    user_id = await issuer.verify_access_token(token)

    refresh_token = issuer.issue_refresh_token()
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Tuple

from jose import jwt, JOSEError, JWTError

from common.auth.exceptions import (
    InvalidTokenError,
    TokenExpiredError,
    TokenSigningError,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenIssuer:
    """
    Issues and verifies the two token kinds.

    The signing secret is injected at construction; every token issued by
    one instance shares it.
    """

    # 64 bytes of entropy -> 128 hex characters
    REFRESH_TOKEN_BYTES = 64

    def __init__(
        self,
        secret: Optional[str],
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 15,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize the token issuer.

        Args:
            secret: Secret key for JWT signing
            algorithm: JWT algorithm (default: HS256)
            access_token_expire_minutes: Access token validity window
            clock: Returns the current time. Sets iat and exp at issuance
                and is the reference time for the expiry check on verification
        """
        self._secret = secret
        self._algorithm = algorithm
        self._access_token_expire = timedelta(minutes=access_token_expire_minutes)
        self._clock = clock

    async def issue_access_token(self, user_id: str) -> Tuple[str, datetime]:
        """
        Create a signed access token for a user.

        Args:
            user_id: The user's ID, stored as the ``sub`` claim

        Returns:
            tuple of (token, expires_at)

        Raises:
            TokenSigningError: No secret configured or the signer failed
        """
        if not self._secret:
            raise TokenSigningError("JWT secret is not configured")

        now = self._clock()
        expires_at = now + self._access_token_expire
        payload = {
            "sub": user_id,
            "iat": now,
            "exp": expires_at,
        }

        try:
            token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        except JOSEError as e:
            raise TokenSigningError(f"Failed to sign access token: {e}") from e

        return token, expires_at

    async def verify_access_token(self, token: str) -> str:
        """
        Verify an access token and return its subject.

        Args:
            token: The encoded JWT

        Returns:
            The user ID from the ``sub`` claim

        Raises:
            TokenExpiredError: The token's expiry has passed
            InvalidTokenError: Bad signature, malformed token or missing subject
        """
        if not self._secret:
            raise InvalidTokenError("JWT secret is not configured")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e

        # Expiry is checked against the injected clock, not jose's wall clock
        exp = payload.get("exp")
        if not isinstance(exp, (int, float)):
            raise InvalidTokenError("Token missing expiry")
        if exp <= self._clock().timestamp():
            raise TokenExpiredError("Token has expired")

        user_id = payload.get("sub")
        if not user_id:
            raise InvalidTokenError("Token missing user ID")

        return user_id

    def issue_refresh_token(self) -> str:
        """Generate an opaque refresh token (128 hex characters)."""
        return secrets.token_hex(self.REFRESH_TOKEN_BYTES)
