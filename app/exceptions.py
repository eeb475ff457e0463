# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error leaves the service as JSON: {"status": false, "message": ..., ...}
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ContactApiException(Exception):
    """
    Base exception for the Contact Us API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "CONTACT_API_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "status": False,
            "message": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Contact Us Exceptions
# =============================================================================

class ContactUsNotFoundError(ContactApiException):
    """Raised when a contact request ID doesn't exist."""

    def __init__(self, record_id: str):
        super().__init__(
            message=f"ContactUs not found: {record_id}",
            code="CONTACT_US_NOT_FOUND",
            status_code=404,
            suggestion="Check that the id is correct and the request hasn't been deleted",
            details={"id": record_id}
        )

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["data"] = None
        return result


class ContactUsValidationError(ContactApiException):
    """
    Raised when a request body fails schema checks.

    Carries every violated field, not just the first one.
    """

    def __init__(self, errors: list[dict[str, Any]]):
        super().__init__(
            message="Invalid request data",
            code="VALIDATION_ERROR",
            status_code=422,
        )
        self.errors = errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": False,
            "message": self.message,
            "code": self.code,
            "data": self.errors,
        }


# =============================================================================
# Persistence Exceptions
# =============================================================================

class PersistenceError(ContactApiException):
    """Raised when the database rejects or cannot serve a query."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            message=f"Database operation failed: {operation}",
            code="PERSISTENCE_ERROR",
            status_code=503,
            suggestion="Try again later or contact support if the issue persists",
            details={"operation": operation, "error": error}
        )


class PersistenceTimeoutError(ContactApiException):
    """Raised when a database or cache call exceeds the request timeout."""

    def __init__(self, operation: str, timeout: float):
        super().__init__(
            message=f"Database operation timed out: {operation}",
            code="PERSISTENCE_TIMEOUT",
            status_code=504,
            suggestion="Try again later",
            details={"operation": operation, "timeout_seconds": timeout}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def contact_api_exception_handler(
    request: Request,
    exc: ContactApiException
) -> JSONResponse:
    """Convert ContactApiException to JSON response."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.details}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle FastAPI request validation errors (malformed ids, bad bodies).

    Uses the same field-error shape as body validation failures.
    """
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())),
            "message": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content={
            "status": False,
            "message": "Invalid request data",
            "code": "VALIDATION_ERROR",
            "data": errors,
        }
    )
