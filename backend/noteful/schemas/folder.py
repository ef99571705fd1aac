"""
Noteful Backend — Folder Schemas
==================================

What:  Request body and public representation of a folder.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field

from noteful.schemas.base import CamelModel


class FolderIn(CamelModel):
    """
    Body of POST /api/folders and PUT /api/folders/{id}.

    `name` is optional at the schema level so a missing name is reported by
    FolderService with a 400 and a specific message, not a generic 422.
    Unknown keys are ignored.
    """
    name: Optional[str] = Field(default=None, description="Folder name (required, unique)")


class FolderResponse(CamelModel):
    """Public folder representation: store id exposed as `id`."""
    id: uuid.UUID = Field(description="Folder identifier")
    name: str = Field(description="Folder name")
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    updated_at: datetime = Field(description="Last modification timestamp (UTC)")
