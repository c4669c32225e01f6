"""Role repository: lifecycle-aware persistence of roles."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gatekeeper.application.dtos.role import RoleResult
from gatekeeper.application.interfaces.services import ILifecycleHooks
from gatekeeper.infrastructure.persistence.models.role import Role
from gatekeeper.infrastructure.persistence.repositories.base import BaseRepository


def role_to_result(r: Role) -> RoleResult:
    """Map ORM Role to application RoleResult."""
    return RoleResult(
        id=r.id,
        name=r.name,
        display_name=r.display_name,
        description=r.description,
    )


class RoleRepository(BaseRepository[Role]):
    """Role repository. save/delete/restore notify the lifecycle hooks."""

    def __init__(
        self,
        db: AsyncSession,
        entity_type: str,
        hooks: ILifecycleHooks | None = None,
        model: type[Role] = Role,
    ) -> None:
        super().__init__(db, model, entity_type, hooks)

    async def get_by_name(self, name: str) -> Role | None:
        result = await self.db.execute(select(self.model).where(self.model.name == name))
        return result.scalar_one_or_none()
