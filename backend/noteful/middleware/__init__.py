"""
Noteful Backend — Middleware Package
======================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID first so every log line of the request can carry it
    - Logging measures the full handler duration, including error handlers
"""

from noteful.middleware.logging import RequestLoggingMiddleware
from noteful.middleware.request_id import RequestIDMiddleware, request_id_var

__all__ = ["RequestIDMiddleware", "RequestLoggingMiddleware", "request_id_var"]
