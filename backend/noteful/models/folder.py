"""
Noteful Backend — Folder SQLAlchemy Model
===========================================

What:  ORM model for the `folders` table.
Who:   FolderService (CRUD + cascade) and Alembic.

Table Design:
    - name is UNIQUE: the store rejects a second folder with the same name;
      FolderService translates that into DuplicateNameError.
    - Notes point at folders through `notes.folder_id` without a foreign
      key, so deleting a folder never deletes notes.
"""

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base
from noteful.models.mixins import IdentifierMixin, TimestampMixin


class Folder(IdentifierMixin, TimestampMixin, Base):
    """A named container that notes may reference."""

    __tablename__ = "folders"

    name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        unique=True,
        comment="Folder name, unique across all folders",
    )

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, name='{self.name}')>"
