"""RolePermission repository: role-permission grants (single entity responsibility)."""

from __future__ import annotations

from sqlalchemy import select

from gatekeeper.infrastructure.persistence.models.mixins import SoftDeleteMixin
from gatekeeper.infrastructure.persistence.models.permission import (
    Permission,
    RolePermission,
)
from gatekeeper.infrastructure.persistence.repositories.pivot_repo import PivotRepository


class RolePermissionRepository(PivotRepository):
    """Role-permission link table. Owner side is the role."""

    model = RolePermission
    owner_column = "role_id"
    target_column = "permission_id"

    async def get_role_permissions(
        self, role_id: str, permission_model: type[Permission] = Permission
    ) -> list[Permission]:
        """Return permissions granted to the role, skipping soft-deleted ones."""
        query = (
            select(permission_model)
            .join(RolePermission, RolePermission.permission_id == permission_model.id)
            .where(RolePermission.role_id == role_id)
            .order_by(permission_model.name)
        )
        if issubclass(permission_model, SoftDeleteMixin):
            query = query.where(permission_model.deleted_at.is_(None))
        result = await self.db.execute(query)
        return list(result.scalars().all())
