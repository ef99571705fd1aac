"""
Noteful Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() registers middleware, exception handlers and routers;
       the lifespan opens the document store and disposes it on shutdown.
Who:   uvicorn (`uvicorn noteful.main:app`) and the test suite.

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware Chain:                                   │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐   │
    │  │  Request ID  │→│ Logging  │→│  GZip / CORS    │   │
    │  └──────────────┘ └──────────┘ └─────────────────┘   │
    │                                                      │
    │  Routes:                                             │
    │  /api/folders   /api/tags   /api/notes   /health     │
    │                                                      │
    │  Exception Handlers:                                 │
    │  Validation/Duplicate→400  NotFound→404  Store→500   │
    └──────────────────────────────────────────────────────┘

Error body (every status >= 400):
    {"message": str, "error": {...} or {}, "requestId": str}
    `error` is filled only when ENVIRONMENT=development.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from noteful import __version__
from noteful.config import settings
from noteful.database import create_schema, create_session_factory, open_database
from noteful.exceptions import NotefulError, StoreError
from noteful.middleware import RequestIDMiddleware, RequestLoggingMiddleware, request_id_var
from noteful.routes import folders, health, notes, tags

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before the store is opened.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers are noisy at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the document store for the lifetime of the process.

    Startup:
        1. Setup logging
        2. Open the engine and publish a session factory on app.state
        3. Optionally create missing tables (CREATE_SCHEMA=true)

    Shutdown:
        The engine is disposed when `open_database` exits, even if the
        server stops because of an error.
    """
    setup_logging()
    logger.info("Noteful API starting up (environment=%s)", settings.environment)

    async with open_database(settings.database_url) as engine:
        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)

        if settings.create_schema:
            await create_schema(engine)
            logger.info("Database schema ensured")

        logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
        yield

        logger.info("Noteful API shutting down...")

    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_body(request: Request, message: str, error: Dict[str, Any]) -> Dict[str, Any]:
    """Build the JSON error payload; `error` is dropped outside development."""
    rid = getattr(request.state, "request_id", "") or request_id_var.get("")
    return {
        "message": message,
        "error": error if settings.is_development else {},
        "requestId": rid,
    }


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the shared error body.

    Handler hierarchy:
        NotefulError subclasses → exc.status_code (400 / 404 / 500)
        RequestValidationError  → 400 (malformed JSON or wrong field types)
        HTTPException           → its own status (unknown route → 404)
        Exception (fallback)    → 500 with a generic message
    """

    @app.exception_handler(NotefulError)
    async def handle_noteful_error(request: Request, exc: NotefulError):
        if isinstance(exc, StoreError):
            logger.error("Store error: %s | Context: %s", exc.message, exc.context)
        elif exc.status_code >= 400:
            logger.warning("%s: %s", type(exc).__name__, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(
                request,
                exc.message,
                {"type": type(exc).__name__, "details": jsonable_encoder(exc.context)},
            ),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        logger.warning("Malformed request: %s", exc.errors())
        return JSONResponse(
            status_code=400,
            content=error_body(
                request,
                "The request body is not valid",
                {"type": "RequestValidationError", "details": jsonable_encoder(exc.errors())},
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(request, str(exc.detail), {"type": "HTTPException"}),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: stack trace is logged, never returned outside development."""
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=error_body(
                request,
                "Internal Server Error",
                {"type": type(exc).__name__, "details": str(exc)},
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns a fresh instance each call; the test suite builds its own and
    binds `app.state.session_factory` to an in-memory store.
    """
    app = FastAPI(
        title="Noteful API",
        description="Notes organized into folders and tags, with text search.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location", "X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(folders.router)
    app.include_router(tags.router)
    app.include_router(notes.router)
    app.include_router(health.router)

    return app


app = create_app()
