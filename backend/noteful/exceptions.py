"""
Noteful Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the folder, tag and note services.
How:   Each exception carries a user-facing message and an optional context
       dict. Global exception handlers (registered in main.py) turn them
       into `{"message": ..., "error": ...}` JSON responses.
Who:   Raised by services and routes; caught by the global handlers.

Exception Hierarchy:
    NotefulError (base)
    ├── ValidationError          → 400 Bad Request (missing/empty field)
    │   ├── InvalidIdentifierError  → 400 (malformed path id)
    │   └── InvalidReferenceError   → 400 (malformed folderId / tag id)
    ├── DuplicateNameError       → 400 Bad Request (unique name taken)
    ├── NotFoundError            → 404 Not Found
    └── StoreError               → 500 Internal Server Error

Validation and reference errors are raised before any store call, so they
never leave partial writes behind. Duplicate names are only known after
the store rejects a write; the service translates that rejection.
"""

from typing import Any, Dict, Optional


class NotefulError(Exception):
    """
    Base exception for all Noteful application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (only returned in development mode)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotefulError):
    """
    Raised when a required field is missing or empty.

    Example response:
        {"message": "Missing `name` in request body", "error": {}}
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


class InvalidIdentifierError(ValidationError):
    """Raised when a path identifier is not a well-formed id."""

    def __init__(self, value: Any = None, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["value"] = str(value)
        super().__init__(message="The `id` is not valid", field="id", context=ctx)


class InvalidReferenceError(ValidationError):
    """Raised when a reference field (`folderId`, an entry of `tags`) is malformed."""

    def __init__(
        self,
        message: str,
        field: str,
        value: Any = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["value"] = value if isinstance(value, (str, int, float, bool, type(None))) else repr(value)
        super().__init__(message=message, field=field, context=ctx)


class DuplicateNameError(NotefulError):
    """
    Raised when a folder or tag name collides with an existing one.

    The store's unique index rejects the write; the service catches the
    IntegrityError and re-raises this with a resource-specific message.
    """

    status_code = 400

    def __init__(self, resource: str, name: Optional[str] = None):
        ctx: Dict[str, Any] = {"resource": resource}
        if name is not None:
            ctx["name"] = name
        super().__init__(message=f"The {resource} name already exists", context=ctx)
        self.resource = resource


class NotFoundError(NotefulError):
    """
    Raised by routes when a service reported no match.

    Services return None for missing records; the route decides whether
    that becomes a 404.
    """

    status_code = 404

    def __init__(
        self,
        resource: Optional[str] = None,
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource:
            ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message="Not Found", context=ctx)


class StoreError(NotefulError):
    """
    Raised when a store operation fails for reasons other than the above.

    The message returned to the client is always generic; the original
    error type is kept in the context and logged server-side.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
