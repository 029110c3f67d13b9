"""
Album Store — Custom Exception Hierarchy
========================================

What:  Application-specific exceptions for each error class the service reports.
Why:   Services raise these; global handlers in main.py turn them into
       `{"error": "<message>"}` bodies with the right status code, so route
       handlers never build error responses themselves.

Exception Hierarchy:
    AlbumStoreError (base)
    ├── ValidationError   → 400 Bad Request
    ├── NotFoundError     → 404 Not Found
    ├── DatabaseError     → 500 Internal Server Error
    └── StartupError      → fatal, raised from the lifespan before serving
"""

from typing import Any, Dict, Optional


class AlbumStoreError(Exception):
    """
    Base exception for all Album Store errors.

    Attributes:
        message:  User-facing error description (returned in the API response)
        context:  Additional debug info (logged, not returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(AlbumStoreError):
    """
    Raised when client input cannot be decoded.

    When:    Malformed JSON body, wrong field types, non-integer path id,
             id outside the signed 64-bit range.
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


class NotFoundError(AlbumStoreError):
    """
    Raised when no stored document matches the id filter.

    The response message is fixed ("album not found"); the id only goes
    into the logging context.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "album",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class DatabaseError(AlbumStoreError):
    """
    Raised when a persistence operation fails.

    `context["original_error"]` holds the driver's error text. The exception
    handler decides whether that text or the generic message reaches the
    client (see `Settings.expose_backend_errors`).
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

    @property
    def original_error(self) -> Optional[str]:
        return self.context.get("original_error")


class StartupError(AlbumStoreError):
    """
    Raised when the service cannot start: a store connection failed or the
    startup cache sync hit a bad record. Never caught; the ASGI server exits.
    """

    def __init__(
        self,
        message: str = "Startup failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
