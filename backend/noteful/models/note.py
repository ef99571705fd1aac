"""
Noteful Backend — Note SQLAlchemy Models
==========================================

What:  ORM models for the `notes` and `note_tags` tables.
Who:   NoteService for CRUD and filtering; Folder/Tag services for cascade
       cleanup; Alembic for schema management.

Table Design:
    - folder_id: weak reference to folders.id. No foreign key: a note may
      name a folder id that does not (or no longer) exist.
    - note_tags: the ordered tag list of a note, one row per entry.
      `position` keeps list order; `tag_id` is a weak reference to tags.id.
      Rows are owned by the note (FK with ON DELETE CASCADE).

Query Patterns:
    - List notes: ORDER BY created_at, id
      → idx_notes_created_at
    - Filter by folder: WHERE folder_id = :id
      → idx_notes_folder_id (also used by the folder delete cascade)
    - Filter by tag / tag delete cascade: note_tags WHERE tag_id = :id
      → idx_note_tags_tag_id
"""

import uuid
from typing import List, Optional

from sqlalchemy import ForeignKey, Index, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from noteful.database import Base
from noteful.models.mixins import IdentifierMixin, TimestampMixin


class Note(IdentifierMixin, TimestampMixin, Base):
    """A titled piece of text, optionally filed in a folder and tagged."""

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note title (required)",
    )

    content: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        default=None,
        comment="Free-form note body",
    )

    folder_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        nullable=True,
        default=None,
        comment="Weak reference to folders.id; cleared when the folder is deleted",
    )

    tag_links: Mapped[List["NoteTag"]] = relationship(
        back_populates="note",
        order_by="NoteTag.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_notes_created_at", "created_at"),
        Index("idx_notes_folder_id", "folder_id"),
    )

    @property
    def tag_ids(self) -> List[uuid.UUID]:
        """Tag references in list order."""
        return [link.tag_id for link in self.tag_links]

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}')>"


class NoteTag(Base):
    """One entry of a note's ordered tag list."""

    __tablename__ = "note_tags"

    note_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("notes.id", ondelete="CASCADE"),
        primary_key=True,
    )
    position: Mapped[int] = mapped_column(Integer, primary_key=True)
    tag_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        nullable=False,
        comment="Weak reference to tags.id; rows are removed when the tag is deleted",
    )

    note: Mapped[Note] = relationship(back_populates="tag_links")

    __table_args__ = (
        Index("idx_note_tags_tag_id", "tag_id"),
    )

    def __repr__(self) -> str:
        return f"<NoteTag(note_id={self.note_id}, position={self.position}, tag_id={self.tag_id})>"
