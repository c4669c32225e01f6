"""Assignment service: role/permission mutations and cache invalidation.

Every mutation goes to the assignment store first and then flushes the
cache tag of the relation it touched, so the next resolver read refetches.
Flushed tags are also recorded in pending_tags when given; session_scope
flushes them again once the transaction has ended.
The service also implements ILifecycleHooks for the principal and role
repositories (cascade on hard delete, invalidate after save/delete/restore).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from gatekeeper.application.interfaces.repositories import IAssignmentStore
from gatekeeper.application.interfaces.services import IReadThroughCache
from gatekeeper.core.config import Settings
from gatekeeper.domain.exceptions import ConfigurationException
from gatekeeper.domain.value_objects.core import target_id
from gatekeeper.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)


class AssignmentService:
    """Mutation coordinator over the assignment store and the cache layer."""

    def __init__(
        self,
        store: IAssignmentStore,
        cache: IReadThroughCache,
        settings: Settings,
        pending_tags: set[str] | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            store: Assignment store the mutations write to.
            cache: Cache layer holding the resolved snapshots.
            settings: Relation and entity names.
            pending_tags: Set that collects every invalidated tag, so the
                unit of work can invalidate them again after commit.
        """
        self.store = store
        self.cache = cache
        self.settings = settings
        self.pending_tags = pending_tags

    @property
    def role_user(self) -> str:
        return self.settings.role_user_table

    @property
    def permission_role(self) -> str:
        return self.settings.permission_role_table

    async def _invalidate(self, *tags: str) -> None:
        for tag in tags:
            await self.cache.invalidate(tag)
            if self.pending_tags is not None:
                self.pending_tags.add(tag)

    # Principal <-> role

    @traced("gatekeeper.attach_role")
    async def attach_role(self, principal: Any, role: Any) -> None:
        """Assign role to principal (no-op if already assigned).

        Both arguments accept an id, an entity with ``id``, or a mapping with ``"id"``.

        Raises:
            InvalidArgumentException: If either argument has an unsupported shape.
            ResourceNotFoundException: If either end does not exist.
        """
        principal_id = target_id(principal, "principal")
        role_id = target_id(role, "role")
        await self.store.attach(self.role_user, principal_id, role_id)
        await self._invalidate(self.role_user)

    @traced("gatekeeper.detach_role")
    async def detach_role(self, principal: Any, role: Any) -> None:
        """Remove role from principal."""
        principal_id = target_id(principal, "principal")
        role_id = target_id(role, "role")
        await self.store.detach(self.role_user, principal_id, role_id)
        await self._invalidate(self.role_user)

    @traced("gatekeeper.attach_roles")
    async def attach_roles(self, principal: Any, roles: Iterable[Any]) -> None:
        """Assign several roles, invalidating once after the batch."""
        principal_id = target_id(principal, "principal")
        role_ids = [target_id(role, "role") for role in roles]
        for role_id in role_ids:
            await self.store.attach(self.role_user, principal_id, role_id)
        await self._invalidate(self.role_user)

    @traced("gatekeeper.detach_roles")
    async def detach_roles(self, principal: Any, roles: Iterable[Any] | None = None) -> None:
        """Remove several roles; None or empty removes every assigned role."""
        principal_id = target_id(principal, "principal")
        role_ids = [target_id(role, "role") for role in roles or ()]
        if not role_ids:
            role_ids = [r.id for r in await self.store.fetch_roles(principal_id)]
        for role_id in role_ids:
            await self.store.detach(self.role_user, principal_id, role_id)
        await self._invalidate(self.role_user)

    # Role <-> permission

    @traced("gatekeeper.attach_permission")
    async def attach_permission(self, role: Any, permission: Any) -> None:
        """Grant permission to role (no-op if already granted)."""
        role_id = target_id(role, "role")
        permission_id = target_id(permission, "permission")
        await self.store.attach(self.permission_role, role_id, permission_id)
        await self._invalidate(self.permission_role)

    @traced("gatekeeper.detach_permission")
    async def detach_permission(self, role: Any, permission: Any) -> None:
        """Revoke permission from role."""
        role_id = target_id(role, "role")
        permission_id = target_id(permission, "permission")
        await self.store.detach(self.permission_role, role_id, permission_id)
        await self._invalidate(self.permission_role)

    @traced("gatekeeper.attach_permissions")
    async def attach_permissions(self, role: Any, permissions: Iterable[Any]) -> None:
        """Grant several permissions, invalidating once after the batch."""
        role_id = target_id(role, "role")
        permission_ids = [target_id(p, "permission") for p in permissions]
        for permission_id in permission_ids:
            await self.store.attach(self.permission_role, role_id, permission_id)
        await self._invalidate(self.permission_role)

    @traced("gatekeeper.detach_permissions")
    async def detach_permissions(
        self, role: Any, permissions: Iterable[Any] | None = None
    ) -> None:
        """Revoke several permissions; None or empty revokes every granted one."""
        role_id = target_id(role, "role")
        permission_ids = [target_id(p, "permission") for p in permissions or ()]
        if not permission_ids:
            permission_ids = [p.id for p in await self.store.fetch_permissions(role_id)]
        for permission_id in permission_ids:
            await self.store.detach(self.permission_role, role_id, permission_id)
        await self._invalidate(self.permission_role)

    @traced("gatekeeper.save_permissions")
    async def save_permissions(self, role: Any, permissions: Sequence[Any] | None) -> None:
        """Replace the role's grant set; empty input revokes all."""
        role_id = target_id(role, "role")
        permission_ids = [target_id(p, "permission") for p in permissions or ()]
        if permission_ids:
            await self.store.sync(self.permission_role, role_id, permission_ids)
        else:
            await self.store.detach_all(self.permission_role, role_id)
        await self._invalidate(self.permission_role)

    # Lifecycle hooks (ILifecycleHooks)

    def _tags_for(self, entity_type: str) -> tuple[str, ...]:
        if entity_type == self.settings.principal_entity:
            return (self.role_user,)
        if entity_type == self.settings.role_entity:
            # cached role lists of principals embed the role
            return (self.permission_role, self.role_user)
        raise ConfigurationException(
            f"No cache tags for entity type: {entity_type!r}", "entity_type"
        )

    async def before_delete(self, entity_type: str, entity_id: str) -> None:
        """Cascade relation rows of the entity unless its type is soft-deletable."""
        if self.store.supports_soft_delete(entity_type):
            logger.debug("%s %s is soft-deletable; relation rows kept", entity_type, entity_id)
            return
        await self.store.delete_cascade(entity_type, entity_id)

    async def on_save(self, entity_type: str, entity_id: str, saved: bool) -> bool:
        if saved:
            await self._invalidate(*self._tags_for(entity_type))
        return saved

    async def on_delete(self, entity_type: str, entity_id: str, deleted: bool) -> bool:
        if deleted:
            await self._invalidate(*self._tags_for(entity_type))
        return deleted

    async def on_restore(self, entity_type: str, entity_id: str, restored: bool) -> bool:
        """Invalidate after restore.

        With role_restore_inverted a role invalidates only when the restore
        reports failure (legacy behaviour).
        """
        tags = self._tags_for(entity_type)
        if entity_type == self.settings.role_entity and self.settings.role_restore_inverted:
            if not restored:
                await self._invalidate(*tags)
            return restored
        if restored:
            await self._invalidate(*tags)
        return restored
