"""
Auth system errors.

Each error is an APIException, so raising one anywhere in a request ends
the request with its status code and a ``{message, code}`` body.
"""

from common.utils.exceptions import (
    BadRequestException,
    UnauthorizedException,
    ServiceUnavailableException,
)


class ValidationError(BadRequestException):
    """Malformed signup or password input (400)."""

    def __init__(self, message: str = "Validation error", code: str = "VALIDATION_ERROR"):
        super().__init__(message=message, code=code)


class InvalidCredentialsError(BadRequestException):
    """Login with an unknown email or a wrong password (400)."""

    def __init__(self, message: str = "Invalid email or password", code: str = "INVALID_CREDENTIALS"):
        super().__init__(message=message, code=code)


class AuthenticationError(UnauthorizedException):
    """Missing, invalid or expired access token or refresh session (401)."""

    def __init__(self, message: str = "Authentication required", code: str = "UNAUTHORIZED"):
        super().__init__(message=message, code=code)


class PersistenceError(ServiceUnavailableException):
    """The backing store could not be read or written (503)."""

    def __init__(self, message: str = "Storage unavailable", code: str = "PERSISTENCE_ERROR"):
        super().__init__(message=message, code=code)


class SessionPersistError(PersistenceError):
    """A new refresh session could not be written to the user record."""

    def __init__(self, message: str = "Failed to persist session", code: str = "SESSION_PERSIST_FAILED"):
        super().__init__(message=message, code=code)
