"""
Utilities module - Common helpers for API responses, exceptions, and validation.
"""

from common.utils.responses import success_response, serialize_document
from common.utils.exceptions import (
    APIException,
    BadRequestException,
    UnauthorizedException,
    NotFoundException,
    InternalServerException,
    ServiceUnavailableException,
)
from common.utils.password import validate_password

__all__ = [
    "success_response",
    "serialize_document",
    "APIException",
    "BadRequestException",
    "UnauthorizedException",
    "NotFoundException",
    "InternalServerException",
    "ServiceUnavailableException",
    "validate_password",
]
