"""
Repository base classes.
"""

from typing import Generic, Type, TypeVar
from uuid import UUID
from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from wagerdesk.models.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """
    Lookups for one model over a request's session.

    Subclasses set `model` and may narrow `_base_query`.
    """

    model: Type[ModelT]

    def __init__(self, db: AsyncSession):
        self.db = db

    def _base_query(self) -> Select:
        return select(self.model)

    async def get_by_id(self, id: UUID | str) -> ModelT | None:
        """Fetch by primary key. Raises ValueError for a malformed string ID."""
        if isinstance(id, str):
            id = UUID(id)
        result = await self.db.execute(self._base_query().where(self.model.id == id))
        return result.scalar_one_or_none()


class SoftDeleteRepository(BaseRepository[ModelT]):
    """Hides rows with deleted_at set."""

    def _base_query(self) -> Select:
        return super()._base_query().where(self.model.deleted_at.is_(None))
