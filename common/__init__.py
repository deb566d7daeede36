"""
Common library for reusable infrastructure components.

This package provides generic modules that can be used across projects:

- database: Async MongoDB connection with Motor
- auth: Token issuing, password hashing and pluggable request guards
- utils: Standard responses, exceptions, password validation
- config: Base settings class
"""

from common.database import MongoDB
from common.auth import (
    Authenticator,
    AuthContext,
    TokenIssuer,
    PasswordHasher,
    create_auth_dependency,
)
from common.utils import (
    success_response,
    serialize_document,
    APIException,
    BadRequestException,
    UnauthorizedException,
    NotFoundException,
    validate_password,
)
from common.config import BaseAppSettings

__all__ = [
    # Database
    "MongoDB",
    # Auth
    "Authenticator",
    "AuthContext",
    "TokenIssuer",
    "PasswordHasher",
    "create_auth_dependency",
    # Utils
    "success_response",
    "serialize_document",
    "APIException",
    "BadRequestException",
    "UnauthorizedException",
    "NotFoundException",
    "validate_password",
    # Config
    "BaseAppSettings",
]
