"""
Noteful Backend — Tag Service
===============================

What:  Tag CRUD. Deleting a tag pulls it from the tag list of every note
       that carries it; the notes themselves are kept.
Who:   Built per request by `noteful.routes.dependencies.get_tag_service`.
"""

import uuid

from sqlalchemy import delete, select, update

from noteful.models.mixins import utcnow
from noteful.models.note import Note, NoteTag
from noteful.models.tag import Tag
from noteful.schemas.tag import TagResponse
from noteful.services.named_service import NamedResourceService


class TagService(NamedResourceService):
    model = Tag
    schema = TagResponse
    resource = "tag"

    async def _clear_references(self, resource_id: uuid.UUID) -> int:
        tagged = select(NoteTag.note_id).where(NoteTag.tag_id == resource_id)
        touched = await self.db.execute(
            update(Note)
            .where(Note.id.in_(tagged))
            .values(updated_at=utcnow())
            .execution_options(synchronize_session="fetch")
        )
        # Remaining entries keep their positions, so list order is preserved.
        await self.db.execute(
            delete(NoteTag)
            .where(NoteTag.tag_id == resource_id)
            .execution_options(synchronize_session="fetch")
        )
        return touched.rowcount or 0
