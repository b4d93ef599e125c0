"""
NoteTime Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the three failure classes the API
       reports: bad client input, missing rows, and store failures.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by routes and NoteService; caught by global handlers.

Exception Hierarchy:
    NoteTimeError (base)
    ├── ValidationError   → 400 Bad Request
    ├── NotFoundError     → 404 Not Found
    └── StoreError        → 500 Internal Server Error (driver text surfaced)
"""

from typing import Any, Dict, Optional


class NoteTimeError(Exception):
    """
    Base exception for all NoteTime application errors.

    Attributes:
        message:  Error description returned in the API response
        context:  Additional debug info, logged server-side
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NoteTimeError):
    """
    Raised when client input fails validation.

    When:    Missing search term, malformed request payload.
    HTTP:    400 Bad Request
    """

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


class NotFoundError(NoteTimeError):
    """
    Raised when a requested row does not exist.

    When:    GET /api/notes/{id} with an id that has no row.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows; NoteService converts that
    into this exception so routes never inspect query results.
    """

    def __init__(
        self,
        resource: str = "Note",
        resource_id: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class StoreError(NoteTimeError):
    """
    Raised when a database statement fails.

    When:    Connection failure, constraint violation (e.g. a line appended
             to a note that does not exist), I/O error.
    HTTP:    500 Internal Server Error

    The message is the driver's error text, returned to the caller as-is.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
