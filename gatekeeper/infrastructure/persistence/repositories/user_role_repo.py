"""UserRole repository: principal-role assignments (single entity responsibility)."""

from __future__ import annotations

from sqlalchemy import select

from gatekeeper.infrastructure.persistence.models.mixins import SoftDeleteMixin
from gatekeeper.infrastructure.persistence.models.permission import UserRole
from gatekeeper.infrastructure.persistence.models.role import Role
from gatekeeper.infrastructure.persistence.repositories.pivot_repo import PivotRepository


class UserRoleRepository(PivotRepository):
    """Principal-role link table. Owner side is the principal."""

    model = UserRole
    owner_column = "principal_id"
    target_column = "role_id"

    async def get_principal_roles(
        self, principal_id: str, role_model: type[Role] = Role
    ) -> list[Role]:
        """Return roles assigned to the principal, skipping soft-deleted roles."""
        query = (
            select(role_model)
            .join(UserRole, UserRole.role_id == role_model.id)
            .where(UserRole.principal_id == principal_id)
            .order_by(role_model.name)
        )
        if issubclass(role_model, SoftDeleteMixin):
            query = query.where(role_model.deleted_at.is_(None))
        result = await self.db.execute(query)
        return list(result.scalars().all())
