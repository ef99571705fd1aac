"""
Noteful Backend — Request Logging Middleware
==============================================

What:  One access log line per HTTP request.
How:   Times the downstream call and logs method, path (with query string,
       so note filters are visible), status, duration and request id.

Request bodies are never logged (note content is user data).
Health probes and the `test` environment are not logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from noteful.config import settings
from noteful.middleware.request_id import request_id_var

logger = logging.getLogger("noteful.access")

SILENT_PATHS = frozenset({"/health"})


def level_for(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING, otherwise INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SILENT_PATHS or settings.environment == "test":
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"
        rid = request_id_var.get("")

        logger.log(
            level_for(response.status_code),
            "%s %s -> %d (%.1fms) [%s]",
            request.method,
            target,
            response.status_code,
            elapsed_ms,
            rid,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
                "client_ip": request.client.host if request.client else "unknown",
            },
        )
        return response
