"""
Noteful Backend — Services Layer
==================================

What:  Business logic between routes (HTTP) and the database (persistence).
How:   Each service is built per request around the request's AsyncSession
       (see `noteful.routes.dependencies`) and returns response schemas.

Service Inventory:
    - FolderService: folder CRUD; delete clears `folderId` on notes
    - TagService:    tag CRUD; delete removes the tag from every note
    - NoteService:   note CRUD, search/folder/tag filters, inline tags

Not-found policy:
    get/update return None when nothing matches. The route layer turns
    that into a 404; services never raise NotFoundError themselves.
"""

from noteful.services.folder_service import FolderService
from noteful.services.note_service import NoteService
from noteful.services.tag_service import TagService

__all__ = ["FolderService", "NoteService", "TagService"]
