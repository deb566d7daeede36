"""
FastAPI authentication dependencies.

Provides a factory that turns any Authenticator into a dependency that can
be injected into route handlers.

Example:
    from common.auth import create_auth_dependency

    require_user = create_auth_dependency(get_access_authenticator)

    @app.get("/profile")
    async def get_profile(auth: AuthContext = Depends(require_user)):
        return {"user_id": auth.user_id}
"""

from typing import Callable

from fastapi import Request

from common.auth.base import Authenticator, AuthContext


def create_auth_dependency(
    get_authenticator: Callable[[], Authenticator],
):
    """
    Factory to create FastAPI auth dependencies.

    Args:
        get_authenticator: Callable that returns the Authenticator instance.
            Resolved per request so services can be initialised after import.

    Returns:
        A FastAPI dependency that returns the AuthContext or raises 401
    """

    async def authenticate_request(request: Request) -> AuthContext:
        authenticator = get_authenticator()
        return await authenticator.authenticate(request)

    return authenticate_request
