"""Pivot repository: generic access to a two-column link table.

A link table has an owner column (the side the relation is read from)
and a target column. Subclasses bind the model and the two columns and
add typed fetches that join the target entity.
"""

from __future__ import annotations

from typing import Any, ClassVar

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from gatekeeper.infrastructure.persistence.database import Base


class PivotRepository:
    """Link rows only: exists, add, remove, and list ids for one side."""

    model: ClassVar[type[Base]]
    owner_column: ClassVar[str]
    target_column: ClassVar[str]

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @property
    def _owner(self) -> Any:
        return getattr(self.model, self.owner_column)

    @property
    def _target(self) -> Any:
        return getattr(self.model, self.target_column)

    async def target_ids(self, owner_id: str) -> set[str]:
        """Return ids linked to owner_id."""
        result = await self.db.execute(select(self._target).where(self._owner == owner_id))
        return set(result.scalars().all())

    async def owner_ids(self, target_id: str) -> set[str]:
        """Return owner ids linked to target_id (inverse side)."""
        result = await self.db.execute(select(self._owner).where(self._target == target_id))
        return set(result.scalars().all())

    async def exists(self, owner_id: str, target_id: str) -> bool:
        result = await self.db.execute(
            select(self._owner).where(self._owner == owner_id, self._target == target_id)
        )
        return result.first() is not None

    async def add(self, owner_id: str, target_id: str) -> bool:
        """Insert the link. Returns False (no write) when it already exists."""
        if await self.exists(owner_id, target_id):
            return False
        self.db.add(self.model(**{self.owner_column: owner_id, self.target_column: target_id}))
        await self.db.flush()
        return True

    async def remove(self, owner_id: str, target_id: str) -> bool:
        """Delete the link. Returns False when there was none."""
        result = await self.db.execute(
            delete(self.model).where(self._owner == owner_id, self._target == target_id)
        )
        await self.db.flush()
        return bool(result.rowcount)

    async def remove_all(self, owner_id: str) -> int:
        """Delete every link of owner_id. Returns the number of rows removed."""
        result = await self.db.execute(delete(self.model).where(self._owner == owner_id))
        await self.db.flush()
        return result.rowcount or 0

    async def remove_all_for_target(self, target_id: str) -> int:
        """Delete every link pointing at target_id. Returns the number of rows removed."""
        result = await self.db.execute(delete(self.model).where(self._target == target_id))
        await self.db.flush()
        return result.rowcount or 0
