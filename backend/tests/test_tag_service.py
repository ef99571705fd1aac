"""
Noteful Backend — Tag Service Tests
=====================================

What:  TagService against a seeded in-memory store, focused on what differs
       from folders: duplicate message and pulling tags out of notes.
"""

import uuid

import pytest

from noteful.exceptions import DuplicateNameError, InvalidIdentifierError, ValidationError
from noteful.seed import load_seed
from noteful.services import NoteService, TagService

TAGS = {item["name"]: item["id"] for item in load_seed("tags")}
NOTES = {item["id"]: item for item in load_seed("notes")}
BREED = TAGS["breed"]


class TestTagCrud:

    @pytest.mark.asyncio
    async def test_list_is_ordered_by_name(self, db_session):
        tags = await TagService(db_session).list()
        assert [t.name for t in tags] == ["breed", "domestic", "feral", "hot"]

    @pytest.mark.asyncio
    async def test_get(self, db_session):
        tag = await TagService(db_session).get(BREED)
        assert tag.name == "breed"
        assert await TagService(db_session).get(str(uuid.uuid4())) is None

    @pytest.mark.asyncio
    async def test_get_malformed_id(self, db_session):
        with pytest.raises(InvalidIdentifierError, match="The `id` is not valid"):
            await TagService(db_session).get("not-an-id")

    @pytest.mark.asyncio
    async def test_create(self, db_session):
        tag = await TagService(db_session).create("indoor")
        assert tag.name == "indoor"
        assert (await TagService(db_session).get(tag.id)).name == "indoor"

    @pytest.mark.asyncio
    async def test_create_requires_name(self, db_session):
        with pytest.raises(ValidationError, match="Missing `name` in request body"):
            await TagService(db_session).create(None)

    @pytest.mark.asyncio
    async def test_create_duplicate_uses_tag_message(self, db_session):
        with pytest.raises(DuplicateNameError, match="The tag name already exists"):
            await TagService(db_session).create("hot")

    @pytest.mark.asyncio
    async def test_update(self, db_session):
        updated = await TagService(db_session).update(BREED, "pedigree")
        assert updated.name == "pedigree"
        assert updated.id == uuid.UUID(BREED)

    @pytest.mark.asyncio
    async def test_update_vanished_tag(self, db_session):
        assert await TagService(db_session).update(str(uuid.uuid4()), "ghost") is None

    @pytest.mark.asyncio
    async def test_update_duplicate(self, db_session):
        with pytest.raises(DuplicateNameError):
            await TagService(db_session).update(BREED, "feral")


class TestTagDelete:

    @pytest.mark.asyncio
    async def test_delete_pulls_tag_from_notes(self, db_session):
        tagged = [note_id for note_id, note in NOTES.items() if BREED in note["tags"]]
        assert len(tagged) > 1

        await TagService(db_session).delete(BREED)

        assert await TagService(db_session).get(BREED) is None
        notes = NoteService(db_session)
        for note_id in tagged:
            note = await notes.get(note_id)
            assert note is not None
            remaining = [t for t in NOTES[note_id]["tags"] if t != BREED]
            assert [str(t.id) for t in note.tags] == remaining
        assert await notes.list(tag_id=BREED) == []

    @pytest.mark.asyncio
    async def test_delete_keeps_untagged_notes(self, db_session):
        before = await NoteService(db_session).list()
        await TagService(db_session).delete(BREED)
        after = await NoteService(db_session).list()
        assert [n.id for n in after] == [n.id for n in before]

    @pytest.mark.asyncio
    async def test_delete_missing_is_a_no_op(self, db_session):
        await TagService(db_session).delete(str(uuid.uuid4()))
        assert len(await TagService(db_session).list()) == len(TAGS)

    @pytest.mark.asyncio
    async def test_delete_malformed_id(self, db_session):
        with pytest.raises(InvalidIdentifierError):
            await TagService(db_session).delete("DOES/NOT/EXIST")
