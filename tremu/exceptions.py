"""
Tremu Backend — Custom Exception Hierarchy
============================================

What:  Application-specific exceptions for every error class the API reports.
How:   Each exception carries a human-readable message and an optional context
       dict. Global exception handlers (registered in main.py) map them to
       HTTP status codes and the ``{message, error}`` response envelope.
Who:   Raised by services, the ordering module, and the auth gate.

Exception Hierarchy:
    TremuError (base)
    ├── ValidationError          → 400 Bad Request
    ├── AuthenticationError      → 401 Unauthorized
    ├── PermissionDeniedError    → 403 Forbidden
    ├── NotFoundError            → 404 Not Found
    ├── ConflictError            → 409 Conflict
    ├── RateLimitExceededError   → 429 Too Many Requests
    └── DatabaseError            → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class TremuError(Exception):
    """
    Base exception for all Tremu application errors.

    Attributes:
        message:  User-facing error description (returned in the response)
        context:  Additional debug info (logged; ``original_error`` is also
                  surfaced as the envelope's ``error`` field)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TremuError):
    """
    Raised when client input fails a business rule.

    Schema-level failures (missing fields, wrong types) are reported by
    FastAPI as RequestValidationError and mapped to the same 400 response.
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthenticationError(TremuError):
    """Missing, malformed, expired, or wrongly signed credentials."""

    status_code = 401

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PermissionDeniedError(TremuError):
    """
    The caller is authenticated but lacks the board role for the action.

    Members may read and edit tasks; only the owner may change board
    structure (columns, invitations, deletion).
    """

    status_code = 403

    def __init__(
        self,
        message: str = "You do not have permission to perform this action",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(TremuError):
    """Raised when a referenced board, column, task, or user does not exist."""

    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(TremuError):
    """A uniqueness rule would be violated (e.g. email already registered)."""

    status_code = 409

    def __init__(
        self,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(TremuError):
    """
    Raised when a persistence operation fails unexpectedly.

    The request transaction is rolled back by ``get_db_session`` before the
    handler formats the 500 response.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(TremuError):
    """Client exceeded the per-IP request budget for the current window."""

    status_code = 429

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Too many requests. Please wait {retry_after} seconds before retrying."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
