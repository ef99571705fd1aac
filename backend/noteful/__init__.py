"""
Noteful Backend — Application Package Initializer
=================================================

What: Marks the `noteful` directory as a Python package.
Who:  Imported by uvicorn (`noteful.main:app`), Alembic, pytest and the seed CLI.

Architecture Note:
    The backend follows the same layered layout for all three resources
    (folders, tags, notes):

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← status codes, headers
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← validation, cascade cleanup
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
