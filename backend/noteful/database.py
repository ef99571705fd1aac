"""
Noteful Backend — Database Session Management
===============================================

What:  Async SQLAlchemy engine lifecycle, session factory, and FastAPI dependency.
How:   `open_database()` owns the engine for the lifetime of the process
       (acquired in the app lifespan, disposed on exit). Each request gets
       its own session that commits on success and rolls back on error.
Who:   The app lifespan opens the store; route dependencies build services
       around the per-request session.

Transaction boundary:
    Every store call issued by one service operation runs inside the same
    request session, so a cascading delete (clear references, then remove
    the row) is committed or rolled back as a unit. On SQLite the
    transaction is still per-connection, so tests observe the same
    all-or-nothing behaviour as PostgreSQL.
"""

import logging
from contextlib import asynccontextmanager, contextmanager
from typing import AsyncGenerator, AsyncIterator, Iterator, Optional

from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from noteful.config import settings
from noteful.exceptions import NotefulError, StoreError

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Registers every model with a single metadata object, which Alembic
    and `create_schema()` read to build the tables.
    """
    pass


# ── Engine Configuration ──────────────────────────────────────────────────
def create_engine(database_url: Optional[str] = None, **overrides) -> AsyncEngine:
    """
    Build an async engine for the given URL (defaults to settings).

    Pool sizing only applies to server databases with the default pool;
    SQLite and explicit `poolclass` overrides reject the sizing arguments.
    """
    url = database_url or settings.database_url
    options = {"echo": settings.log_level == "DEBUG"}
    if make_url(url).get_backend_name() != "sqlite" and "poolclass" not in overrides:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    options.update(overrides)
    return create_async_engine(url, **options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to `engine`.

    expire_on_commit=False: response models are built from ORM objects
    after the request transaction commits.
    """
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@asynccontextmanager
async def open_database(database_url: Optional[str] = None) -> AsyncIterator[AsyncEngine]:
    """
    Scoped acquisition of the store connection pool.

    Usage:
        async with open_database(settings.database_url) as engine:
            ...

    The engine is disposed when the block exits, including on error.
    """
    engine = create_engine(database_url)
    logger.info("Opened database engine (%s)", engine.url.render_as_string(hide_password=True))
    try:
        yield engine
    finally:
        await engine.dispose()
        logger.info("Database engine disposed")


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables known to `Base.metadata` (no-op for existing tables)."""
    # Models must be imported so they register with the metadata
    from noteful import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_schema(engine: AsyncEngine) -> None:
    """Drop every table known to `Base.metadata`."""
    from noteful import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


# ── Error Translation ─────────────────────────────────────────────────────
@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """
    Wrap unexpected SQLAlchemy failures in StoreError.

    Application errors raised inside the block (including ones a service
    derived from an IntegrityError) pass through untouched.

    Usage:
        with store_errors("delete folder"):
            await session.execute(...)
    """
    try:
        yield
    except NotefulError:
        raise
    except SQLAlchemyError as e:
        logger.error("Store error during %s: %s", operation, str(e), exc_info=True)
        raise StoreError(
            context={"operation": operation, "error_type": type(e).__name__},
        ) from e


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory stored on app.state
        2. Yields it to the service layer
        3. On success: commits the transaction (a failed commit becomes StoreError)
        4. On error: rolls back the transaction
        5. Always: closes the session (returns connection to pool)

    Routes must depend on it with `scope="function"` so the commit runs
    before the response is sent; see `noteful.routes.dependencies`.

    Raises:
        Any database exception propagates to the global error handlers.
    """
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            with store_errors("commit"):
                await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
