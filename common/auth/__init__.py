"""
Authentication module - token issuing, password hashing and request guards.
"""

from common.auth.base import Authenticator, AuthContext
from common.auth.jwt_auth import TokenIssuer
from common.auth.password_hasher import PasswordHasher
from common.auth.dependencies import create_auth_dependency
from common.auth.exceptions import (
    HashingError,
    TokenSigningError,
    InvalidTokenError,
    TokenExpiredError,
)

__all__ = [
    "Authenticator",
    "AuthContext",
    "TokenIssuer",
    "PasswordHasher",
    "create_auth_dependency",
    "HashingError",
    "TokenSigningError",
    "InvalidTokenError",
    "TokenExpiredError",
]
