"""
Noteful Backend — Folder Service
==================================

What:  Folder CRUD. Deleting a folder unfiles its notes; notes are kept.
Who:   Built per request by `noteful.routes.dependencies.get_folder_service`.
"""

import uuid

from sqlalchemy import update

from noteful.models.folder import Folder
from noteful.models.mixins import utcnow
from noteful.models.note import Note
from noteful.schemas.folder import FolderResponse
from noteful.services.named_service import NamedResourceService


class FolderService(NamedResourceService):
    model = Folder
    schema = FolderResponse
    resource = "folder"

    async def _clear_references(self, resource_id: uuid.UUID) -> int:
        result = await self.db.execute(
            update(Note)
            .where(Note.folder_id == resource_id)
            .values(folder_id=None, updated_at=utcnow())
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0
