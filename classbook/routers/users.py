"""
FastAPI router for user accounts and tokens.

Provides signup, login, access token refresh and password update.
Tokens travel in the ``x-access-token`` and ``x-refresh-token`` headers.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response

from common.auth.base import AuthContext
from classbook.auth import pipelines as auth_pipelines
from classbook.auth.middleware import ACCESS_TOKEN_HEADER, REFRESH_TOKEN_HEADER
from classbook.schemas.auth import (
    SignupRequest,
    LoginRequest,
    UpdatePasswordRequest,
    AccessTokenResponse,
    MessageResponse,
)
from classbook.dependencies import (
    get_credential_store,
    get_session_manager,
    get_token_issuer,
    get_settings,
    require_access_token,
    require_refresh_session,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


def _attach_tokens(response: Response, result: dict) -> dict:
    response.headers[REFRESH_TOKEN_HEADER] = result["refreshToken"]
    response.headers[ACCESS_TOKEN_HEADER] = result["accessToken"]
    return result["user"]


@router.post("")
async def signup(body: SignupRequest, response: Response):
    """
    Sign up.

    Creates the user, opens a refresh session and returns both tokens in
    the response headers. The body is the public user record.
    """
    result = await auth_pipelines.signup_pipeline(
        credential_store=get_credential_store(),
        session_manager=get_session_manager(),
        token_issuer=get_token_issuer(),
        email=body.email,
        password=body.password,
    )
    return _attach_tokens(response, result)


@router.post("/login")
async def login(body: LoginRequest, response: Response):
    """
    Log in.

    Same token flow as signup; 400 on bad credentials.
    """
    result = await auth_pipelines.login_pipeline(
        credential_store=get_credential_store(),
        session_manager=get_session_manager(),
        token_issuer=get_token_issuer(),
        email=body.email,
        password=body.password,
        prune_expired_sessions=get_settings().PRUNE_EXPIRED_SESSIONS,
    )
    return _attach_tokens(response, result)


@router.get("/me/access-token", response_model=AccessTokenResponse)
async def refresh_access_token(
    auth: Annotated[AuthContext, Depends(require_refresh_session)],
    response: Response,
):
    """
    Issue a new access token.

    Requires a valid refresh session (``x-refresh-token`` + ``_id`` headers).
    """
    access_token = await auth_pipelines.refresh_access_token_pipeline(
        token_issuer=get_token_issuer(),
        auth=auth,
    )
    response.headers[ACCESS_TOKEN_HEADER] = access_token
    return {"accessToken": access_token}


@router.patch("/me/password", response_model=MessageResponse)
async def update_password(
    body: UpdatePasswordRequest,
    auth: Annotated[AuthContext, Depends(require_access_token)],
):
    """
    Replace the caller's password.

    Existing sessions stay valid.
    """
    await auth_pipelines.update_password_pipeline(
        credential_store=get_credential_store(),
        auth=auth,
        new_password=body.password,
    )
    return {"message": "Password updated successfully"}
