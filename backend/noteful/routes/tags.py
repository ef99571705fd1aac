"""
Noteful Backend — Tag Route Handlers
======================================

What:  CRUD endpoints under /api/tags.
How:   Each handler delegates to TagService; identifier and name
       validation happen in the service and surface as 400 responses.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from noteful.exceptions import NotFoundError
from noteful.routes.dependencies import get_tag_service, location_of
from noteful.schemas.base import ErrorResponse
from noteful.schemas.tag import TagIn, TagResponse
from noteful.services import TagService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tags", tags=["Tags"])

_errors = {
    400: {"description": "Invalid id, missing name or duplicate name", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.get("", response_model=List[TagResponse], summary="List tags by name")
async def list_tags(
    service: TagService = Depends(get_tag_service),
) -> List[TagResponse]:
    return await service.list()


@router.get(
    "/{tag_id}",
    response_model=TagResponse,
    responses={404: {"description": "Tag not found", "model": ErrorResponse}, **_errors},
    summary="Get a single tag",
)
async def get_tag(
    tag_id: str,
    service: TagService = Depends(get_tag_service),
) -> TagResponse:
    tag = await service.get(tag_id)
    if tag is None:
        raise NotFoundError(resource="tag", resource_id=tag_id)
    return tag


@router.post(
    "",
    response_model=TagResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_errors,
    summary="Create a tag",
)
async def create_tag(
    body: TagIn,
    request: Request,
    response: Response,
    service: TagService = Depends(get_tag_service),
) -> TagResponse:
    tag = await service.create(body.name)
    response.headers["Location"] = location_of(request, tag.id)
    return tag


@router.put(
    "/{tag_id}",
    response_model=TagResponse,
    responses={404: {"description": "Tag not found", "model": ErrorResponse}, **_errors},
    summary="Rename a tag",
)
async def update_tag(
    tag_id: str,
    body: TagIn,
    service: TagService = Depends(get_tag_service),
) -> TagResponse:
    tag = await service.update(tag_id, body.name)
    if tag is None:
        raise NotFoundError(resource="tag", resource_id=tag_id)
    return tag


@router.delete(
    "/{tag_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_errors,
    summary="Delete a tag and remove it from notes",
)
async def delete_tag(
    tag_id: str,
    service: TagService = Depends(get_tag_service),
) -> Response:
    await service.delete(tag_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
