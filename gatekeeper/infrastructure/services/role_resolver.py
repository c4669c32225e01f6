"""Resolves a principal's roles through the cache (implements IRoleResolver)."""

from __future__ import annotations

from gatekeeper.application.dtos.role import RoleResult
from gatekeeper.application.interfaces.repositories import IAssignmentStore
from gatekeeper.application.interfaces.services import IReadThroughCache
from gatekeeper.infrastructure.cache.keys import roles_key


class RoleResolver:
    """Read-through: roles_for_<principalId> under the principal-role tag."""

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

    async def resolve_roles(self, principal_id: str) -> list[RoleResult]:
        """Return the principal's roles; on a miss fetch from the store and cache them."""

        async def compute() -> list[dict]:
            return [r.to_dict() for r in await self.store.fetch_roles(principal_id)]

        data = await self.cache.get_or_compute(
            roles_key(principal_id), self.relation, compute, self.ttl
        )
        return [RoleResult.from_dict(item) for item in data]
