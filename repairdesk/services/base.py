"""
Generic store access shared by the entity services.
create / read / update / delete against one table, keyed by UUID.
"""

from typing import Any, Generic, NamedTuple, TypeVar
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from repairdesk.core.exceptions import NotFoundError, parse_identifier
from repairdesk.models.base import BaseModel


ModelT = TypeVar("ModelT", bound=BaseModel)


class UpdateResult(NamedTuple):
    matched: int
    modified: int


class CRUDService(Generic[ModelT]):
    """Base service: subclasses set `model` and `label`."""

    model: type[ModelT]
    label: str = "Entity"

    def __init__(self, db: AsyncSession):
        self.db = db

    def parse_id(self, entity_id: str | UUID | None) -> UUID:
        return parse_identifier(entity_id, f"{self.label.lower()} ID")

    async def insert(self, **values: Any) -> ModelT:
        """Insert a row and return it with its generated identifier."""
        entity = self.model(**values)

        self.db.add(entity)
        await self.db.flush()
        await self.db.refresh(entity)

        return entity

    async def get_by_id(self, entity_id: str | UUID | None) -> ModelT | None:
        """Get entity by ID. The identifier is validated before any store access."""
        uid = self.parse_id(entity_id)
        return await self.db.get(self.model, uid)

    async def get_or_404(self, entity_id: str | UUID | None) -> ModelT:
        """
        Get entity by ID or raise 404.

        Raises:
            InvalidIdentifierError: If the identifier is malformed
            NotFoundError: If no row matches
        """
        entity = await self.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.label} not found")
        return entity

    async def list(self, *criteria: Any) -> list[ModelT]:
        """Rows matching all criteria, in insertion order."""
        query = (
            select(self.model)
            .where(*criteria)
            .order_by(self.model.created_at, self.model.id)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def update_fields(
        self,
        entity_id: str | UUID | None,
        values: dict[str, Any],
    ) -> UpdateResult:
        """
        Apply a partial update.

        An unknown identifier is not an error: it reports zero matched.
        """
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return UpdateResult(matched=0, modified=0)

        changed = False
        for field, value in values.items():
            if getattr(entity, field) != value:
                setattr(entity, field, value)
                changed = True

        if changed:
            await self.db.flush()
            await self.db.refresh(entity)

        return UpdateResult(matched=1, modified=int(changed))

    async def delete_by_id(self, entity_id: str | UUID | None) -> int:
        """Delete one row, returning the number deleted."""
        uid = self.parse_id(entity_id)
        result = await self.db.execute(
            delete(self.model).where(self.model.id == uid)
        )
        return result.rowcount or 0
