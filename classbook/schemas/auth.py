"""
Pydantic models for Auth system request/response validation.
"""

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    """Request body for user signup. Unknown fields are ignored."""
    email: str = Field(..., description="Account email, unique")
    password: str = Field(..., description="Plaintext password, at least 8 characters")


class LoginRequest(BaseModel):
    """Request body for user login."""
    email: str
    password: str


class UpdatePasswordRequest(BaseModel):
    """Request body for replacing the caller's password."""
    password: str = Field(..., description="New plaintext password")


class AccessTokenResponse(BaseModel):
    """Response for access token refresh."""
    accessToken: str


class MessageResponse(BaseModel):
    message: str
