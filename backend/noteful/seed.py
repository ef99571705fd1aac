"""
Noteful Backend — Database Seeding
====================================

What:  Resets the store and loads the bundled sample folders, tags and notes.
How:   Drops and recreates every table, then inserts the JSON fixtures from
       `noteful/seed_data/` with their fixed identifiers.
Who:   Developers (`python -m noteful.seed`) and the test suite, which calls
       `seed_database()` on a fresh in-memory store.

Seed notes get creation times one minute apart starting at SEED_EPOCH, so
the default note ordering is the order of notes.json.
"""

import asyncio
import json
import logging
import uuid
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from noteful.config import settings
from noteful.database import create_schema, create_session_factory, drop_schema, open_database
from noteful.models import Folder, Note, NoteTag, Tag

logger = logging.getLogger(__name__)

SEED_DIR = Path(__file__).parent / "seed_data"
SEED_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


def load_seed(name: str) -> List[Dict[str, Any]]:
    """Read `seed_data/<name>.json`."""
    with open(SEED_DIR / f"{name}.json", encoding="utf-8") as fh:
        return json.load(fh)


def _stamp(index: int) -> Dict[str, datetime]:
    ts = SEED_EPOCH + timedelta(minutes=index)
    return {"created_at": ts, "updated_at": ts}


async def seed_database(session: AsyncSession) -> Dict[str, int]:
    """
    Insert the seed fixtures into an empty schema.

    Returns:
        Number of rows inserted per collection, e.g. {"notes": 8, ...}.
        The caller owns the transaction (commit or rollback).
    """
    folders = [
        Folder(id=uuid.UUID(item["id"]), name=item["name"], **_stamp(i))
        for i, item in enumerate(load_seed("folders"))
    ]
    tags = [
        Tag(id=uuid.UUID(item["id"]), name=item["name"], **_stamp(i))
        for i, item in enumerate(load_seed("tags"))
    ]
    notes = []
    for i, item in enumerate(load_seed("notes")):
        folder_id = item.get("folderId")
        notes.append(
            Note(
                id=uuid.UUID(item["id"]),
                title=item["title"],
                content=item.get("content"),
                folder_id=uuid.UUID(folder_id) if folder_id else None,
                tag_links=[
                    NoteTag(position=position, tag_id=uuid.UUID(tag))
                    for position, tag in enumerate(item.get("tags", []))
                ],
                **_stamp(i),
            )
        )

    session.add_all(folders + tags + notes)
    await session.flush()
    return {"folders": len(folders), "tags": len(tags), "notes": len(notes)}


async def reset_and_seed(database_url: Optional[str] = None) -> Dict[str, int]:
    """Drop the schema, recreate it and load the fixtures."""
    async with open_database(database_url or settings.database_url) as engine:
        await drop_schema(engine)
        await create_schema(engine)
        session_factory = create_session_factory(engine)
        async with session_factory() as session:
            counts = await seed_database(session)
            await session.commit()
    return counts


def main() -> None:
    from noteful.main import setup_logging

    setup_logging()
    counts = asyncio.run(reset_and_seed())
    for collection, count in counts.items():
        logger.info("Inserted %d %s", count, collection.capitalize())


if __name__ == "__main__":
    main()
