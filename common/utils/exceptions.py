"""
HTTP errors raised by Classbook services.

Every error is an ``APIException``. Raising one anywhere below a route ends
the request with its status code and a body of the form

    {"detail": {"message": str, "code": str, "details": Any}}

where ``details`` is present only when given. The app's own handlers for
request validation and storage failures answer with the same body.

Example:
    from common.utils.exceptions import NotFoundException

    async def delete_student(self, user_id: str, student_id: str) -> dict:
        removed = await self._students_collection.find_one_and_delete(
            self._owned(user_id, student_id)
        )
        if removed is None:
            raise NotFoundException("Student not found", code="STUDENT_NOT_FOUND")
        return removed

Feature packages subclass the status classes to fix a default message and
code, e.g. ``classbook.auth.exceptions.PersistenceError`` is a 503 with
code ``PERSISTENCE_ERROR``.
"""

from typing import Optional, Any, Dict
from fastapi import HTTPException


class APIException(HTTPException):
    """HTTPException whose detail is a ``{message, code, details}`` dict."""

    def __init__(
        self,
        status_code: int,
        message: str,
        code: Optional[str] = None,
        details: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Args:
            status_code: HTTP status code
            message: Human-readable error message
            code: Machine-readable error code, e.g. STUDENT_NOT_FOUND
            details: Extra data for the client, such as field errors
            headers: Optional response headers
        """
        detail: Dict[str, Any] = {"message": message}

        if code:
            detail["code"] = code

        if details is not None:
            detail["details"] = details

        self.message = message
        self.code = code

        super().__init__(
            status_code=status_code,
            detail=detail,
            headers=headers,
        )


class BadRequestException(APIException):
    """400. Bad input that the client can correct."""

    def __init__(
        self,
        message: str = "Bad request",
        code: str = "BAD_REQUEST",
        details: Optional[Any] = None,
    ):
        super().__init__(400, message, code, details)


class UnauthorizedException(APIException):
    """401. Missing or rejected access token or refresh session."""

    def __init__(
        self,
        message: str = "Unauthorized",
        code: str = "UNAUTHORIZED",
        details: Optional[Any] = None,
    ):
        super().__init__(401, message, code, details)


class NotFoundException(APIException):
    """404. No such student, classroom or embedded record for this teacher."""

    def __init__(
        self,
        message: str = "Not found",
        code: str = "NOT_FOUND",
        details: Optional[Any] = None,
    ):
        super().__init__(404, message, code, details)


class InternalServerException(APIException):
    # Hashing or signing failures; never carries the underlying error text
    def __init__(
        self,
        message: str = "Internal server error",
        code: str = "INTERNAL_ERROR",
        details: Optional[Any] = None,
    ):
        super().__init__(500, message, code, details)


class ServiceUnavailableException(APIException):
    """503. MongoDB could not be reached or rejected the write."""

    def __init__(
        self,
        message: str = "Service unavailable",
        code: str = "SERVICE_UNAVAILABLE",
        details: Optional[Any] = None,
    ):
        super().__init__(503, message, code, details)
