"""Resolves a role's permissions through the cache (implements IPermissionResolver)."""

from __future__ import annotations

from gatekeeper.application.dtos.permission import PermissionResult
from gatekeeper.application.interfaces.repositories import IAssignmentStore
from gatekeeper.application.interfaces.services import IReadThroughCache
from gatekeeper.infrastructure.cache.keys import permissions_key


class PermissionResolver:
    """Read-through: permissions_for_<roleId> under the role-permission tag."""

    def __init__(
        self,
        store: IAssignmentStore,
        cache: IReadThroughCache,
        relation: str,
        ttl: int | None = None,
    ) -> None:
        self.store = store
        self.cache = cache
        self.relation = relation
        self.ttl = ttl

    async def resolve_permissions(self, role_id: str) -> list[PermissionResult]:
        """Return the role's permissions; on a miss fetch from the store and cache them."""

        async def compute() -> list[dict]:
            return [p.to_dict() for p in await self.store.fetch_permissions(role_id)]

        data = await self.cache.get_or_compute(
            permissions_key(role_id), self.relation, compute, self.ttl
        )
        return [PermissionResult.from_dict(item) for item in data]
