"""
Noteful Backend — Shared Column Definitions
=============================================

What:  Primary key and timestamp columns used by every table.
How:   Declarative mixin; `created_at`/`updated_at` are filled by SQLAlchemy
       on INSERT and `updated_at` is refreshed on every UPDATE.

Timestamps are always UTC-aware in Python. SQLite has no timezone-aware
column type, so values read back from it are tagged as UTC by UTCDateTime.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """TIMESTAMP WITH TIME ZONE that never hands back a naive datetime."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class IdentifierMixin:
    """UUID primary key assigned on insert."""

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier assigned by the store",
    )


class TimestampMixin:
    """Creation and last-modification timestamps maintained by the store."""

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
        comment="When this row was created (UTC)",
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        comment="When this row was last modified (UTC)",
    )
