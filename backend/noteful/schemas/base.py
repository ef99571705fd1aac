"""
Noteful Backend — Shared Schema Configuration
===============================================

What:  Base model shared by every request/response schema.
How:   `alias_generator=to_camel` maps `created_at` → `createdAt` for the
       wire format; `populate_by_name` lets services build models with
       Python attribute names; `from_attributes` reads ORM objects directly.
"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


class ErrorResponse(CamelModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "message": "Missing `name` in request body",
            "error": {},
            "requestId": "1f0c2d9e"
        }

    `error` is only populated in development mode:
        {"type": "ValidationError", "details": {"field": "name"}}
    """
    message: str
    error: dict = {}
    request_id: str = ""


class HealthResponse(CamelModel):
    """Health check response showing service and store status."""
    status: str
    version: str
    database: str
    uptime_seconds: float
