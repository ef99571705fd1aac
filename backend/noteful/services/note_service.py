"""
Noteful Backend — Note Service
================================

What:  Note CRUD, filtered listing, and inline resolution of tags.
Who:   Built per request by `noteful.routes.dependencies.get_note_service`.

Listing (GET /api/notes):
    Filters are combined with AND:
        searchTerm → title ILIKE %term% OR content ILIKE %term%
        folderId   → folder_id = :id
        tagId      → note has a note_tags row with tag_id = :id
    Results are ordered by created_at, then id.

    Query plan (all filters):
        SELECT notes.* FROM notes
        WHERE (lower(title) LIKE :p OR lower(content) LIKE :p)
          AND folder_id = :folder
          AND id IN (SELECT note_id FROM note_tags WHERE tag_id = :tag)
        ORDER BY created_at, id
        → followed by one SELECT for note_tags (selectin) and one for tags

Reference validation:
    folderId and each tags entry must be well-formed ids. Whether the
    folder/tag exists is not checked; a dangling tag reference is simply
    left out of the resolved `tags` list.
"""

import logging
import uuid
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import store_errors
from noteful.exceptions import InvalidReferenceError
from noteful.models.note import Note, NoteTag
from noteful.models.tag import Tag
from noteful.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from noteful.schemas.tag import TagResponse
from noteful.services.validation import parse_id, require_text

logger = logging.getLogger(__name__)


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so `term` matches literally (escape char: backslash)."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def parse_folder_reference(value: Any) -> Optional[uuid.UUID]:
    """`folderId` from a request body: empty means no folder."""
    if value is None or value == "":
        return None
    folder_id = parse_id(value)
    if folder_id is None:
        raise InvalidReferenceError("The `folderId` is not valid", field="folderId", value=value)
    return folder_id


def parse_tag_references(value: Any) -> List[uuid.UUID]:
    """`tags` from a request body: an array of tag ids, order preserved."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise InvalidReferenceError("The `tags` field must be an array", field="tags", value=value)
    tag_ids = []
    for tag in value:
        tag_id = parse_id(tag)
        if tag_id is None:
            raise InvalidReferenceError(f"The tag `{tag}` is not a valid id", field="tags", value=tag)
        tag_ids.append(tag_id)
    return tag_ids


class NoteService:
    """
    Business logic for notes.

    All methods return NoteResponse objects with tags resolved inline;
    get/update return None when the note does not exist.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(
        self,
        search_term: Optional[str] = None,
        folder_id: Optional[str] = None,
        tag_id: Optional[str] = None,
    ) -> List[NoteResponse]:
        """
        List notes matching every supplied filter, oldest first.

        A malformed folderId/tagId filter cannot match any note, so the
        result is empty without querying the store.
        """
        query = select(Note)

        if search_term:
            pattern = f"%{escape_like(search_term)}%"
            query = query.where(
                or_(
                    Note.title.ilike(pattern, escape="\\"),
                    Note.content.ilike(pattern, escape="\\"),
                )
            )

        if folder_id:
            fid = parse_id(folder_id)
            if fid is None:
                return []
            query = query.where(Note.folder_id == fid)

        if tag_id:
            tid = parse_id(tag_id)
            if tid is None:
                return []
            query = query.where(
                Note.id.in_(select(NoteTag.note_id).where(NoteTag.tag_id == tid))
            )

        query = query.order_by(Note.created_at, Note.id)

        with store_errors("list notes"):
            result = await self.db.execute(query)
            notes = list(result.scalars().all())
            return await self._build(notes)

    async def get(self, note_id: Any) -> Optional[NoteResponse]:
        nid = parse_id(note_id)
        if nid is None:
            return None
        with store_errors("get note"):
            note = await self._load(nid)
            if note is None:
                return None
            return (await self._build([note]))[0]

    async def create(self, data: NoteCreate) -> NoteResponse:
        """
        Create a note from the allow-listed fields of `data`.

        Raises:
            ValidationError: title missing or empty
            InvalidReferenceError: malformed folderId or tag id
        """
        title = require_text(data.title, "title")
        folder_id = parse_folder_reference(data.folder_id)
        tag_ids = parse_tag_references(data.tags)

        note = Note(
            title=title,
            content=data.content,
            folder_id=folder_id,
            tag_links=[
                NoteTag(position=position, tag_id=tag)
                for position, tag in enumerate(tag_ids)
            ],
        )
        with store_errors("create note"):
            self.db.add(note)
            await self.db.flush()
            response = (await self._build([note]))[0]

        logger.info("Created note %s (folder=%s, tags=%d)", note.id, folder_id, len(tag_ids))
        return response

    async def update(self, note_id: Any, changes: NoteUpdate) -> Optional[NoteResponse]:
        """
        Apply a partial update (title, content, folderId).

        Only fields present in the request body are written. A supplied
        title must be non-empty; a null/empty folderId unfiles the note.
        """
        nid = parse_id(note_id)
        if nid is None:
            return None

        fields = changes.supplied()
        if "title" in fields:
            require_text(fields["title"], "title")
        if "folder_id" in fields:
            fields["folder_id"] = parse_folder_reference(fields["folder_id"])

        with store_errors("update note"):
            note = await self._load(nid)
            if note is None:
                return None
            for name, value in fields.items():
                setattr(note, name, value)
            await self.db.flush()
            note = await self._load(nid)
            response = (await self._build([note]))[0]

        logger.info("Updated note %s (%s)", nid, ", ".join(sorted(fields)) or "no changes")
        return response

    async def delete(self, note_id: Any) -> None:
        """Remove a note and its tag list. Missing or malformed ids are a no-op."""
        nid = parse_id(note_id)
        if nid is None:
            return
        with store_errors("delete note"):
            await self.db.execute(delete(NoteTag).where(NoteTag.note_id == nid))
            result = await self.db.execute(delete(Note).where(Note.id == nid))
            await self.db.flush()
        self.db.expire_all()
        logger.info("Deleted note %s (removed=%d)", nid, result.rowcount or 0)

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _load(self, note_id: uuid.UUID) -> Optional[Note]:
        result = await self.db.execute(
            select(Note)
            .where(Note.id == note_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _build(self, notes: Iterable[Note]) -> List[NoteResponse]:
        """Serialize notes, resolving their tag ids with a single query."""
        notes = list(notes)
        wanted = {tag_id for note in notes for tag_id in note.tag_ids}
        tags: Dict[uuid.UUID, TagResponse] = {}
        if wanted:
            result = await self.db.execute(select(Tag).where(Tag.id.in_(wanted)))
            tags = {tag.id: TagResponse.model_validate(tag) for tag in result.scalars()}

        return [
            NoteResponse(
                id=note.id,
                title=note.title,
                content=note.content,
                folder_id=note.folder_id,
                tags=[tags[tag_id] for tag_id in note.tag_ids if tag_id in tags],
                created_at=note.created_at,
                updated_at=note.updated_at,
            )
            for note in notes
        ]
