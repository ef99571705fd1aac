"""
Noteful Backend — Tag SQLAlchemy Model
========================================

What:  ORM model for the `tags` table.
Who:   TagService (CRUD + cascade), NoteService (tag resolution) and Alembic.
"""

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base
from noteful.models.mixins import IdentifierMixin, TimestampMixin


class Tag(IdentifierMixin, TimestampMixin, Base):
    """A label that any number of notes may carry."""

    __tablename__ = "tags"

    name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        unique=True,
        comment="Tag name, unique across all tags",
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}')>"
