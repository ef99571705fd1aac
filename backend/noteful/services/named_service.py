"""
Noteful Backend — Named Resource Service
==========================================

What:  Shared CRUD for resources identified by a unique `name`
       (folders and tags).
How:   Subclasses set `model`, `schema` and `resource`, and implement
       `_clear_references()` for the cascade run before a delete.

Operation contract (both folders and tags):
    list()            → all rows ordered by name
    get(id)           → InvalidIdentifierError | None | response
    create(name)      → ValidationError | DuplicateNameError | response
    update(id, name)  → InvalidIdentifierError | ValidationError
                        | DuplicateNameError | None | response
    delete(id)        → InvalidIdentifierError | None (idempotent)

Delete is two statements inside the request transaction: clear references
from notes, then remove the row. Both commit or roll back together.
A note written by a concurrent request between the two statements can
still end up pointing at the deleted id; nothing repairs it afterwards.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any, ClassVar, List, Optional, Type

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import store_errors
from noteful.exceptions import DuplicateNameError
from noteful.schemas.base import CamelModel
from noteful.services.validation import require_id, require_text

logger = logging.getLogger(__name__)


class NamedResourceService(ABC):
    """Base class for FolderService and TagService."""

    model: ClassVar[Type[Any]]
    schema: ClassVar[Type[CamelModel]]
    resource: ClassVar[str]

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self) -> List[CamelModel]:
        with store_errors(f"list {self.resource}s"):
            result = await self.db.execute(select(self.model).order_by(self.model.name))
            return [self.schema.model_validate(row) for row in result.scalars().all()]

    async def get(self, resource_id: Any) -> Optional[CamelModel]:
        rid = require_id(resource_id)
        with store_errors(f"get {self.resource}"):
            row = await self.db.get(self.model, rid)
        return self.schema.model_validate(row) if row is not None else None

    async def create(self, name: Optional[str]) -> CamelModel:
        name = require_text(name, "name")
        row = self.model(name=name)
        with store_errors(f"create {self.resource}"):
            self.db.add(row)
            await self._flush_unique(name)
            await self.db.refresh(row)
        logger.info("Created %s %s (%r)", self.resource, row.id, name)
        return self.schema.model_validate(row)

    async def update(self, resource_id: Any, name: Optional[str]) -> Optional[CamelModel]:
        rid = require_id(resource_id)
        name = require_text(name, "name")
        with store_errors(f"update {self.resource}"):
            row = await self.db.get(self.model, rid)
            if row is None:
                return None
            row.name = name
            await self._flush_unique(name)
            await self.db.refresh(row)
        logger.info("Renamed %s %s to %r", self.resource, rid, name)
        return self.schema.model_validate(row)

    async def delete(self, resource_id: Any) -> None:
        rid = require_id(resource_id)
        with store_errors(f"delete {self.resource}"):
            cleared = await self._clear_references(rid)
            result = await self.db.execute(delete(self.model).where(self.model.id == rid))
            await self.db.flush()
        # Bulk statements bypass loaded objects; reload them on next access
        self.db.expire_all()
        logger.info(
            "Deleted %s %s (removed=%d, notes updated=%d)",
            self.resource, rid, result.rowcount or 0, cleared,
        )

    @abstractmethod
    async def _clear_references(self, resource_id: uuid.UUID) -> int:
        """Remove every note's reference to `resource_id`; return notes touched."""

    async def _flush_unique(self, name: str) -> None:
        """Flush pending writes, translating a unique-name violation."""
        try:
            await self.db.flush()
        except IntegrityError as e:
            logger.warning("Duplicate %s name %r: %s", self.resource, name, e.orig)
            raise DuplicateNameError(self.resource, name) from e
