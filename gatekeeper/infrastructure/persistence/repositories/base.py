"""Base repository: save/delete/restore with lifecycle hooks (cache invalidation).

Writes report success as a boolean. Each write runs in a SAVEPOINT; a
failed flush is logged, only that savepoint is rolled back, and the hook
is told the write did not happen, so no cache tag is flushed for it.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gatekeeper.application.interfaces.services import ILifecycleHooks
from gatekeeper.infrastructure.persistence.database import Base
from gatekeeper.infrastructure.persistence.models.mixins import SoftDeleteMixin
from gatekeeper.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, save, delete, restore and hooks.

    Subclasses set the entity type name passed to the hooks. Soft-deletable
    models (SoftDeleteMixin) are stamped with deleted_at instead of removed.
    """

    def __init__(
        self,
        db: AsyncSession,
        model: type[ModelType],
        entity_type: str,
        hooks: ILifecycleHooks | None = None,
    ) -> None:
        self.db = db
        self.model = model
        self.entity_type = entity_type
        self.hooks = hooks

    @property
    def soft_deletes(self) -> bool:
        return issubclass(self.model, SoftDeleteMixin)

    async def get_by_id(self, entity_id: str, *, with_deleted: bool = False) -> ModelType | None:
        """Return a single record by primary key, or None. Soft-deleted rows need with_deleted."""
        model: Any = self.model
        query = select(self.model).where(model.id == entity_id)
        if self.soft_deletes and not with_deleted:
            query = query.where(model.deleted_at.is_(None))
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def _write(
        self, operation: str, entity_id: Any, apply: Callable[[], Awaitable[None]]
    ) -> bool:
        """Run apply and flush inside a SAVEPOINT.

        A failed flush rolls back the savepoint only; earlier work in the
        session's transaction is kept.
        """
        try:
            async with self.db.begin_nested():
                await apply()
                await self.db.flush()
        except SQLAlchemyError:
            logger.exception("%s %s failed for %s", self.entity_type, operation, entity_id)
            return False
        return True

    async def save(self, obj: ModelType) -> bool:
        """Insert or update obj, then run the on_save hook. Returns False on write failure."""
        # None for a new row until the first flush assigns the CUID
        entity_id = obj.id

        async def apply() -> None:
            self.db.add(obj)

        saved = await self._write("save", entity_id, apply)
        if saved:
            await self.db.refresh(obj)
            entity_id = obj.id
        if self.hooks:
            return await self.hooks.on_save(self.entity_type, str(entity_id), saved)
        return saved

    async def delete(self, obj: ModelType) -> bool:
        """Run before_delete (cascade), delete or soft-delete obj, then on_delete.

        The cascade runs in the savepoint of the delete, so a failed delete
        keeps the relation rows.
        """
        entity_id = str(obj.id)

        async def apply() -> None:
            if self.hooks:
                await self.hooks.before_delete(self.entity_type, entity_id)
            if self.soft_deletes:
                obj.deleted_at = utc_now()
            else:
                await self.db.delete(obj)

        deleted = await self._write("delete", entity_id, apply)
        if self.hooks:
            return await self.hooks.on_delete(self.entity_type, entity_id, deleted)
        return deleted

    async def restore(self, obj: ModelType) -> bool:
        """Reverse a soft delete, then run the on_restore hook.

        Raises:
            TypeError: If the model is not soft-deletable.
        """
        if not self.soft_deletes:
            raise TypeError(f"{self.model.__name__} does not support soft delete")
        entity_id = str(obj.id)

        async def apply() -> None:
            obj.deleted_at = None

        restored = await self._write("restore", entity_id, apply)
        if self.hooks:
            return await self.hooks.on_restore(self.entity_type, entity_id, restored)
        return restored
