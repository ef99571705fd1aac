"""
Noteful Backend — Tag Schemas
===============================
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field

from noteful.schemas.base import CamelModel


class TagIn(CamelModel):
    """Body of POST /api/tags and PUT /api/tags/{id}."""
    name: Optional[str] = Field(default=None, description="Tag name (required, unique)")


class TagResponse(CamelModel):
    """Public tag representation, also embedded in notes."""
    id: uuid.UUID = Field(description="Tag identifier")
    name: str = Field(description="Tag name")
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    updated_at: datetime = Field(description="Last modification timestamp (UTC)")
