"""
Noteful Backend — ORM Models
==============================

Importing this package registers every table with `Base.metadata`
(used by Alembic and `create_schema()`).
"""

from noteful.models.folder import Folder
from noteful.models.tag import Tag
from noteful.models.note import Note, NoteTag

__all__ = ["Folder", "Tag", "Note", "NoteTag"]
