"""
Noteful Backend — Notes Route Handlers
========================================

What:  CRUD endpoints under /api/notes, plus filtered listing.
How:   Extracts query parameters / bodies, delegates to NoteService.

Query parameters of GET /api/notes (all optional, combined with AND):
    searchTerm: case-insensitive substring of title or content
    folderId:   only notes filed in this folder
    tagId:      only notes carrying this tag
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status

from noteful.exceptions import NotFoundError
from noteful.routes.dependencies import get_note_service, location_of
from noteful.schemas.base import ErrorResponse
from noteful.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from noteful.services import NoteService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notes", tags=["Notes"])


@router.get(
    "",
    response_model=List[NoteResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List notes, optionally filtered",
)
async def list_notes(
    search_term: Optional[str] = Query(
        default=None,
        alias="searchTerm",
        description="Case-insensitive substring matched against title and content",
    ),
    folder_id: Optional[str] = Query(default=None, alias="folderId", description="Folder filter"),
    tag_id: Optional[str] = Query(default=None, alias="tagId", description="Tag filter"),
    service: NoteService = Depends(get_note_service),
) -> List[NoteResponse]:
    return await service.list(search_term=search_term, folder_id=folder_id, tag_id=tag_id)


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses={404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Get a single note with its tags",
)
async def get_note(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    note = await service.get(note_id)
    if note is None:
        raise NotFoundError(resource="note", resource_id=note_id)
    return note


@router.post(
    "",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Missing title or malformed reference", "model": ErrorResponse}},
    summary="Create a note",
)
async def create_note(
    body: NoteCreate,
    request: Request,
    response: Response,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    note = await service.create(body)
    response.headers["Location"] = location_of(request, note.id)
    return note


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Empty title or malformed folderId", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Update title, content or folder of a note",
)
async def update_note(
    note_id: str,
    body: NoteUpdate,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    note = await service.update(note_id, body)
    if note is None:
        raise NotFoundError(resource="note", resource_id=note_id)
    return note


@router.delete(
    "/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> Response:
    await service.delete(note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
