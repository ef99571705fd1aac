"""
Noteful Backend — Note Service Unit Tests
===========================================

What:  NoteService against a seeded in-memory store.

What we test:
    ✅ Listing order and every filter, alone and combined
    ✅ Tags resolved inline, in list order
    ✅ Create validation (title, folderId, tags) with no partial writes
    ✅ Partial update semantics (only supplied fields, tags untouched)
    ✅ Idempotent delete
"""

import uuid

import pytest
from sqlalchemy import func, select

from noteful.exceptions import InvalidReferenceError, ValidationError
from noteful.models import Note
from noteful.schemas.note import NoteCreate, NoteUpdate
from noteful.seed import load_seed
from noteful.services import NoteService
from noteful.services.note_service import escape_like

SEED_NOTES = load_seed("notes")
NOTE_IDS = [item["id"] for item in SEED_NOTES]
FOLDERS = {item["name"]: item["id"] for item in load_seed("folders")}
TAGS = {item["name"]: item["id"] for item in load_seed("tags")}


def ids(notes):
    return [str(note.id) for note in notes]


async def count_notes(session) -> int:
    return (await session.execute(select(func.count(Note.id)))).scalar_one()


class TestNoteList:

    @pytest.mark.asyncio
    async def test_list_all_in_creation_order(self, db_session):
        notes = await NoteService(db_session).list()
        assert ids(notes) == NOTE_IDS

    @pytest.mark.asyncio
    async def test_search_matches_title_or_content(self, db_session):
        service = NoteService(db_session)
        # "car" only appears in the content of the last seed note
        assert ids(await service.list(search_term="car")) == [NOTE_IDS[-1]]
        assert ids(await service.list(search_term="GAGA")) == [NOTE_IDS[3]]

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive_on_content(self, db_session):
        expected = [item["id"] for item in SEED_NOTES if "lorem" in item["content"].lower()]
        notes = await NoteService(db_session).list(search_term="LOREM")
        assert ids(notes) == expected

    @pytest.mark.asyncio
    async def test_search_without_match(self, db_session):
        assert await NoteService(db_session).list(search_term="Not a Valid Search") == []

    @pytest.mark.asyncio
    async def test_search_wildcards_match_literally(self, db_session):
        assert await NoteService(db_session).list(search_term="%") == []
        assert await NoteService(db_session).list(search_term="_") == []

    def test_escape_like(self):
        assert escape_like("50%_off\\") == "50\\%\\_off\\\\"

    @pytest.mark.asyncio
    async def test_filter_by_folder(self, db_session):
        archive = FOLDERS["Archive"]
        expected = [item["id"] for item in SEED_NOTES if item.get("folderId") == archive]
        assert ids(await NoteService(db_session).list(folder_id=archive)) == expected

    @pytest.mark.asyncio
    async def test_filter_by_tag(self, db_session):
        breed = TAGS["breed"]
        expected = [item["id"] for item in SEED_NOTES if breed in item["tags"]]
        assert ids(await NoteService(db_session).list(tag_id=breed)) == expected

    @pytest.mark.asyncio
    async def test_filters_are_combined(self, db_session):
        personal, breed = FOLDERS["Personal"], TAGS["breed"]
        expected = [
            item["id"] for item in SEED_NOTES
            if item.get("folderId") == personal and breed in item["tags"]
        ]
        assert len(expected) == 1

        service = NoteService(db_session)
        assert ids(await service.list(folder_id=personal, tag_id=breed)) == expected
        assert await service.list(search_term="boring", folder_id=personal) == []

    @pytest.mark.asyncio
    async def test_malformed_filter_ids_match_nothing(self, db_session):
        service = NoteService(db_session)
        assert await service.list(folder_id="not-an-id") == []
        assert await service.list(tag_id="not-an-id") == []

    @pytest.mark.asyncio
    async def test_tags_are_resolved_in_order(self, db_session):
        note = (await NoteService(db_session).list())[0]
        assert [tag.name for tag in note.tags] == ["breed", "hot"]
        assert all(tag.created_at is not None for tag in note.tags)


class TestNoteGet:

    @pytest.mark.asyncio
    async def test_get_existing(self, db_session):
        note = await NoteService(db_session).get(NOTE_IDS[3])
        assert note.title == SEED_NOTES[3]["title"]
        assert str(note.folder_id) == SEED_NOTES[3]["folderId"]
        assert note.tags == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("note_id", ["DOES-NOT-EXIST", str(uuid.uuid4())])
    async def test_get_missing_returns_none(self, db_session, note_id):
        assert await NoteService(db_session).get(note_id) is None


class TestNoteCreate:

    @pytest.mark.asyncio
    async def test_create_then_get_round_trip(self, db_session):
        service = NoteService(db_session)
        created = await service.create(NoteCreate(
            title="The best article about cats ever!",
            content="Lorem ipsum dolor sit amet...",
            folder_id=FOLDERS["Work"],
            tags=[TAGS["hot"], TAGS["breed"]],
        ))
        fetched = await service.get(str(created.id))

        assert fetched == created
        assert fetched.title == "The best article about cats ever!"
        assert str(fetched.folder_id) == FOLDERS["Work"]
        assert [tag.name for tag in fetched.tags] == ["hot", "breed"]
        assert fetched.created_at is not None and fetched.updated_at is not None

    @pytest.mark.asyncio
    async def test_create_title_only(self, db_session):
        note = await NoteService(db_session).create(NoteCreate(title="Just a title"))
        assert note.content is None
        assert note.folder_id is None
        assert note.tags == []

    @pytest.mark.asyncio
    async def test_unknown_fields_are_ignored(self, db_session):
        body = NoteCreate.model_validate({"title": "Hello", "foo": "bar", "id": "x"})
        note = await NoteService(db_session).create(body)
        assert note.title == "Hello"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title", [None, ""])
    async def test_create_requires_title(self, db_session, title):
        before = await count_notes(db_session)
        with pytest.raises(ValidationError, match="Missing `title` in request body"):
            await NoteService(db_session).create(NoteCreate(title=title, content="body"))
        assert await count_notes(db_session) == before

    @pytest.mark.asyncio
    async def test_create_rejects_malformed_folder(self, db_session):
        before = await count_notes(db_session)
        with pytest.raises(InvalidReferenceError, match="The `folderId` is not valid"):
            await NoteService(db_session).create(NoteCreate(title="t", folder_id="nope"))
        assert await count_notes(db_session) == before

    @pytest.mark.asyncio
    async def test_create_rejects_malformed_tag_naming_it(self, db_session):
        body = NoteCreate(title="t", tags=[TAGS["hot"], "bogus-tag"])
        with pytest.raises(InvalidReferenceError, match="bogus-tag") as exc_info:
            await NoteService(db_session).create(body)
        assert exc_info.value.field == "tags"

    @pytest.mark.asyncio
    async def test_create_rejects_non_list_tags(self, db_session):
        with pytest.raises(InvalidReferenceError, match="must be an array"):
            await NoteService(db_session).create(NoteCreate(title="t", tags=TAGS["hot"]))

    @pytest.mark.asyncio
    async def test_empty_folder_means_unfiled(self, db_session):
        note = await NoteService(db_session).create(NoteCreate(title="t", folder_id=""))
        assert note.folder_id is None

    @pytest.mark.asyncio
    async def test_references_are_not_checked_for_existence(self, db_session):
        ghost = str(uuid.uuid4())
        note = await NoteService(db_session).create(
            NoteCreate(title="t", folder_id=ghost, tags=[ghost])
        )
        assert str(note.folder_id) == ghost
        assert note.tags == []


class TestNoteUpdate:

    @pytest.mark.asyncio
    async def test_update_title_and_content(self, db_session):
        note = await NoteService(db_session).update(
            NOTE_IDS[3], NoteUpdate(title="What about dogs?!", content="woof woof")
        )
        assert note.title == "What about dogs?!"
        assert note.content == "woof woof"

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(self, db_session):
        original = SEED_NOTES[0]
        note = await NoteService(db_session).update(NOTE_IDS[0], NoteUpdate(title="Renamed"))
        assert note.title == "Renamed"
        assert note.content == original["content"]
        assert str(note.folder_id) == original["folderId"]
        assert [str(t.id) for t in note.tags] == original["tags"]

    @pytest.mark.asyncio
    async def test_update_moves_and_unfiles(self, db_session):
        service = NoteService(db_session)
        moved = await service.update(NOTE_IDS[0], NoteUpdate(folder_id=FOLDERS["Work"]))
        assert str(moved.folder_id) == FOLDERS["Work"]

        unfiled = await service.update(NOTE_IDS[0], NoteUpdate.model_validate({"folderId": None}))
        assert unfiled.folder_id is None

    @pytest.mark.asyncio
    async def test_update_ignores_tags(self, db_session):
        body = NoteUpdate.model_validate({"title": "x", "tags": []})
        note = await NoteService(db_session).update(NOTE_IDS[0], body)
        assert [str(t.id) for t in note.tags] == SEED_NOTES[0]["tags"]

    @pytest.mark.asyncio
    async def test_update_rejects_malformed_folder(self, db_session):
        with pytest.raises(InvalidReferenceError):
            await NoteService(db_session).update(NOTE_IDS[0], NoteUpdate(folder_id="nope"))

    @pytest.mark.asyncio
    async def test_update_rejects_empty_title(self, db_session):
        with pytest.raises(ValidationError):
            await NoteService(db_session).update(NOTE_IDS[0], NoteUpdate(title=""))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("note_id", ["DOES-NOT-EXIST", str(uuid.uuid4())])
    async def test_update_missing_returns_none(self, db_session, note_id):
        assert await NoteService(db_session).update(note_id, NoteUpdate(title="x")) is None


class TestNoteDelete:

    @pytest.mark.asyncio
    async def test_delete(self, db_session):
        service = NoteService(db_session)
        await service.delete(NOTE_IDS[0])
        assert await service.get(NOTE_IDS[0]) is None
        assert await count_notes(db_session) == len(NOTE_IDS) - 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("note_id", ["DOES-NOT-EXIST", str(uuid.uuid4())])
    async def test_delete_missing_is_a_no_op(self, db_session, note_id):
        await NoteService(db_session).delete(note_id)
        assert await count_notes(db_session) == len(NOTE_IDS)
