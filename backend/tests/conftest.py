"""
Noteful Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets a fresh in-memory SQLite store (aiosqlite) with the
       schema created and the seed fixtures loaded. StaticPool keeps the
       single in-memory connection alive across sessions.

Fixture Hierarchy (all function-scoped):
    engine          → in-memory async engine with tables created
    session_factory → async_sessionmaker bound to `engine`
    seeded          → seed folders/tags/notes committed
    db_session      → AsyncSession over the seeded store (service tests)
    app             → fresh FastAPI app bound to the seeded store
    test_client     → HTTPX AsyncClient over `app`
"""

import os

# Settings are read at import time; configure before importing noteful
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from noteful.database import create_engine, create_schema, create_session_factory
from noteful.seed import seed_database


@pytest_asyncio.fixture
async def engine():
    """In-memory store with every table created."""
    engine = create_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return create_session_factory(engine)


@pytest_asyncio.fixture
async def seeded(session_factory):
    """Load the bundled seed data; returns the inserted counts."""
    async with session_factory() as session:
        counts = await seed_database(session)
        await session.commit()
    return counts


@pytest_asyncio.fixture
async def db_session(session_factory, seeded):
    """
    A session over the seeded store.

    Usage:
        async def test_list(db_session):
            folders = await FolderService(db_session).list()
    """
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def app(session_factory, seeded):
    """
    A fresh app instance over the seeded store.

    ASGITransport does not run the lifespan, so the session factory is
    attached to app.state directly.
    """
    from noteful.main import create_app

    app = create_app()
    app.state.session_factory = session_factory
    return app


@pytest_asyncio.fixture
async def test_client(app):
    """Async HTTP client talking to `app`."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
