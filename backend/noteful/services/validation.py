"""
Noteful Backend — Shared Input Validation
===========================================

What:  Small helpers used by all three services before touching the store.
How:   Pure functions; they raise ValidationError subclasses and never do I/O.
"""

import uuid
from typing import Any, Optional

from noteful.exceptions import InvalidIdentifierError, ValidationError


def parse_id(value: Any) -> Optional[uuid.UUID]:
    """Return `value` as a UUID, or None if it is not a well-formed id."""
    if isinstance(value, uuid.UUID):
        return value
    if not isinstance(value, str):
        return None
    try:
        return uuid.UUID(value)
    except ValueError:
        return None


def require_id(value: Any) -> uuid.UUID:
    """Parse a path identifier or raise InvalidIdentifierError."""
    parsed = parse_id(value)
    if parsed is None:
        raise InvalidIdentifierError(value)
    return parsed


def require_text(value: Optional[str], field: str) -> str:
    """Reject a missing or empty required string field."""
    if not value:
        raise ValidationError(message=f"Missing `{field}` in request body", field=field)
    return value
