"""
Abstract authenticator interface.

Defines the contract every request guard implements. A route picks exactly
one authenticator; the shared dependency factory in
``common.auth.dependencies`` turns it into a FastAPI dependency, so header
parsing and failure handling live in one place per strategy.

Example:
    from common.auth import Authenticator, AuthContext

    class ApiKeyAuthenticator(Authenticator):
        async def authenticate(self, request) -> AuthContext:
            key = request.headers.get("x-api-key")
            ...
            return AuthContext(user_id=owner_id)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Dict, Any

from fastapi import Request


@dataclass(frozen=True)
class AuthContext:
    """
    Identity resolved by an authenticator.

    Attributes:
        user_id: ID of the authenticated user (always set)
        user: Full user record, only when the guard loaded it from storage
        refresh_token: The refresh token the caller presented, if any
    """

    user_id: str
    user: Optional[Dict[str, Any]] = None
    refresh_token: Optional[str] = None


class Authenticator(ABC):
    """
    Request guard capability.

    Implementations either return an AuthContext or raise an HTTP exception
    that halts the request. They must not leave partial state on the request
    when they fail.
    """

    @abstractmethod
    async def authenticate(self, request: Request) -> AuthContext:
        """
        Authenticate an incoming request.

        Args:
            request: The incoming HTTP request

        Returns:
            AuthContext describing the caller

        Raises:
            UnauthorizedException: If the request carries no valid credentials
        """
        pass
