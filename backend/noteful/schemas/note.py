"""
Noteful Backend — Note Schemas
================================

What:  Request bodies and public representation of a note.

Reference fields (`folderId`, `tags`) are typed loosely on input so that
NoteService can report exactly which value is malformed (InvalidReference)
instead of FastAPI rejecting the whole body.
"""

import uuid
from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field

from noteful.schemas.base import CamelModel
from noteful.schemas.tag import TagResponse


class NoteCreate(CamelModel):
    """
    Body of POST /api/notes.

    Allow-list: title, content, folderId, tags. Anything else is ignored.
    """
    title: Optional[str] = Field(default=None, description="Note title (required)")
    content: Optional[str] = Field(default=None, description="Note body")
    folder_id: Optional[Any] = Field(default=None, description="Folder id")
    tags: Optional[Any] = Field(default=None, description="Array of tag ids")


class NoteUpdate(CamelModel):
    """
    Body of PUT /api/notes/{id} — a partial update.

    Allow-list: title, content, folderId. Only keys present in the request
    are applied (see `model_fields_set`); tags cannot be changed here.
    """
    title: Optional[str] = Field(default=None, description="New title")
    content: Optional[str] = Field(default=None, description="New body")
    folder_id: Optional[Any] = Field(default=None, description="New folder id, or null to unfile")

    def supplied(self) -> dict:
        """Fields the client actually sent, keyed by attribute name."""
        return self.model_dump(include=self.model_fields_set, by_alias=False)


class NoteResponse(CamelModel):
    """
    Public note representation.

    `tags` holds the referenced tags resolved inline, in list order.
    """
    id: uuid.UUID = Field(description="Note identifier")
    title: str = Field(description="Note title")
    content: Optional[str] = Field(default=None, description="Note body")
    folder_id: Optional[uuid.UUID] = Field(default=None, description="Folder the note is filed in")
    tags: List[TagResponse] = Field(default_factory=list, description="Resolved tags")
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    updated_at: datetime = Field(description="Last modification timestamp (UTC)")
