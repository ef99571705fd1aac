"""
Noteful Backend — Service Dependencies
========================================

What:  FastAPI dependencies that build a service around the request session.
How:   `get_db_session` yields one AsyncSession per request; each service is
       constructed with it, so every store call made while handling the
       request shares one transaction.

       `scope="function"` closes the session (commit or rollback) when the
       route returns, before the response starts, so a failed commit
       reaches the client as a 500 and a 201 is only sent for committed rows.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.services import FolderService, NoteService, TagService


def get_folder_service(
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> FolderService:
    return FolderService(db)


def get_tag_service(
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> TagService:
    return TagService(db)


def get_note_service(
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> NoteService:
    return NoteService(db)


def location_of(request, resource_id) -> str:
    """Location header value for a resource created at the request path."""
    return f"{request.url.path.rstrip('/')}/{resource_id}"
