"""SQL assignment store (implements IAssignmentStore).

Composes the two pivot repositories and resolves configured relation
names and entity type names to them. Attach is idempotent; attach and
detach check that both endpoints exist before touching the link table.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from gatekeeper.application.dtos.permission import PermissionResult
from gatekeeper.application.dtos.role import RoleResult
from gatekeeper.core.config import Settings
from gatekeeper.domain.exceptions import (
    ConfigurationException,
    ResourceNotFoundException,
)
from gatekeeper.infrastructure.persistence.database import Base
from gatekeeper.infrastructure.persistence.models.mixins import SoftDeleteMixin
from gatekeeper.infrastructure.persistence.models.permission import Permission
from gatekeeper.infrastructure.persistence.models.principal import Principal
from gatekeeper.infrastructure.persistence.models.role import Role
from gatekeeper.infrastructure.persistence.repositories.pivot_repo import PivotRepository
from gatekeeper.infrastructure.persistence.repositories.role_permission_repo import (
    RolePermissionRepository,
)
from gatekeeper.infrastructure.persistence.repositories.role_repo import role_to_result
from gatekeeper.infrastructure.persistence.repositories.user_role_repo import (
    UserRoleRepository,
)

logger = logging.getLogger(__name__)


def permission_to_result(p: Permission) -> PermissionResult:
    """Map ORM Permission to application PermissionResult."""
    return PermissionResult(
        id=p.id,
        name=p.name,
        display_name=p.display_name,
        description=p.description,
    )


@dataclass(frozen=True)
class _Relation:
    """A configured relation: its pivot and the entity types on each side."""

    pivot: PivotRepository
    owner_type: str
    target_type: str


class SqlAssignmentStore:
    """Assignment store over SQLAlchemy async sessions."""

    def __init__(
        self,
        db: AsyncSession,
        settings: Settings,
        *,
        principal_model: type[Principal] = Principal,
        role_model: type[Role] = Role,
        permission_model: type[Permission] = Permission,
    ) -> None:
        self.db = db
        self.settings = settings
        self.user_roles = UserRoleRepository(db)
        self.role_permissions = RolePermissionRepository(db)
        self._models: dict[str, type[Base]] = {
            settings.principal_entity: principal_model,
            settings.role_entity: role_model,
            settings.permission_entity: permission_model,
        }
        self._role_model = role_model
        self._permission_model = permission_model
        self._relations = {
            settings.role_user_table: _Relation(
                self.user_roles, settings.principal_entity, settings.role_entity
            ),
            settings.permission_role_table: _Relation(
                self.role_permissions, settings.role_entity, settings.permission_entity
            ),
        }

    def _relation(self, relation: str) -> _Relation:
        try:
            return self._relations[relation]
        except KeyError:
            raise ConfigurationException(
                f"Unknown relation: {relation!r}", "relation"
            ) from None

    def _model(self, entity_type: str) -> type[Base]:
        try:
            return self._models[entity_type]
        except KeyError:
            raise ConfigurationException(
                f"Unknown entity type: {entity_type!r}", "entity_type"
            ) from None

    async def _ensure_exists(self, entity_type: str, entity_id: str) -> None:
        if await self.db.get(self._model(entity_type), entity_id) is None:
            raise ResourceNotFoundException(entity_type, entity_id)

    async def fetch_roles(self, principal_id: str) -> list[RoleResult]:
        roles = await self.user_roles.get_principal_roles(principal_id, self._role_model)
        return [role_to_result(r) for r in roles]

    async def fetch_permissions(self, role_id: str) -> list[PermissionResult]:
        permissions = await self.role_permissions.get_role_permissions(
            role_id, self._permission_model
        )
        return [permission_to_result(p) for p in permissions]

    async def attach(self, relation: str, from_id: str, to_id: str) -> None:
        rel = self._relation(relation)
        await self._ensure_exists(rel.owner_type, from_id)
        await self._ensure_exists(rel.target_type, to_id)
        if not await rel.pivot.add(from_id, to_id):
            logger.debug("%s link %s -> %s already present", relation, from_id, to_id)

    async def detach(self, relation: str, from_id: str, to_id: str) -> None:
        rel = self._relation(relation)
        await self._ensure_exists(rel.owner_type, from_id)
        await self._ensure_exists(rel.target_type, to_id)
        await rel.pivot.remove(from_id, to_id)

    async def sync(self, relation: str, from_id: str, to_ids: Sequence[str]) -> None:
        rel = self._relation(relation)
        await self._ensure_exists(rel.owner_type, from_id)
        wanted = set(to_ids)
        current = await rel.pivot.target_ids(from_id)
        for stale in current - wanted:
            await rel.pivot.remove(from_id, stale)
        for missing in wanted - current:
            await self._ensure_exists(rel.target_type, missing)
            await rel.pivot.add(from_id, missing)

    async def detach_all(self, relation: str, from_id: str) -> None:
        await self._relation(relation).pivot.remove_all(from_id)

    async def delete_cascade(self, entity_type: str, entity_id: str) -> None:
        """Remove every link row that references the entity, on either side."""
        self._model(entity_type)
        removed = 0
        for rel in self._relations.values():
            if rel.owner_type == entity_type:
                removed += await rel.pivot.remove_all(entity_id)
            if rel.target_type == entity_type:
                removed += await rel.pivot.remove_all_for_target(entity_id)
        logger.info("Cascade removed %s link rows for %s %s", removed, entity_type, entity_id)

    def supports_soft_delete(self, entity_type: str) -> bool:
        return issubclass(self._model(entity_type), SoftDeleteMixin)
