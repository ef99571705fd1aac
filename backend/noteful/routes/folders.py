"""
Noteful Backend — Folder Route Handlers
=========================================

What:  CRUD endpoints under /api/folders.
How:   Each handler delegates to FolderService; identifier and name
       validation happen in the service and surface as 400 responses.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from noteful.exceptions import NotFoundError
from noteful.routes.dependencies import get_folder_service, location_of
from noteful.schemas.base import ErrorResponse
from noteful.schemas.folder import FolderIn, FolderResponse
from noteful.services import FolderService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/folders", tags=["Folders"])

_errors = {
    400: {"description": "Invalid id, missing name or duplicate name", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.get("", response_model=List[FolderResponse], summary="List folders by name")
async def list_folders(
    service: FolderService = Depends(get_folder_service),
) -> List[FolderResponse]:
    return await service.list()


@router.get(
    "/{folder_id}",
    response_model=FolderResponse,
    responses={404: {"description": "Folder not found", "model": ErrorResponse}, **_errors},
    summary="Get a single folder",
)
async def get_folder(
    folder_id: str,
    service: FolderService = Depends(get_folder_service),
) -> FolderResponse:
    folder = await service.get(folder_id)
    if folder is None:
        raise NotFoundError(resource="folder", resource_id=folder_id)
    return folder


@router.post(
    "",
    response_model=FolderResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_errors,
    summary="Create a folder",
)
async def create_folder(
    body: FolderIn,
    request: Request,
    response: Response,
    service: FolderService = Depends(get_folder_service),
) -> FolderResponse:
    folder = await service.create(body.name)
    response.headers["Location"] = location_of(request, folder.id)
    return folder


@router.put(
    "/{folder_id}",
    response_model=FolderResponse,
    responses={404: {"description": "Folder not found", "model": ErrorResponse}, **_errors},
    summary="Rename a folder",
)
async def update_folder(
    folder_id: str,
    body: FolderIn,
    service: FolderService = Depends(get_folder_service),
) -> FolderResponse:
    folder = await service.update(folder_id, body.name)
    if folder is None:
        raise NotFoundError(resource="folder", resource_id=folder_id)
    return folder


@router.delete(
    "/{folder_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_errors,
    summary="Delete a folder and unfile its notes",
)
async def delete_folder(
    folder_id: str,
    service: FolderService = Depends(get_folder_service),
) -> Response:
    await service.delete(folder_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
