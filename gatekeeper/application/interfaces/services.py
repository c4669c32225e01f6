"""Service interfaces (ports) for the application layer.

Protocols define contracts for the cache, the resolvers and the entity
lifecycle hooks (DIP).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from gatekeeper.application.dtos.permission import PermissionResult
    from gatekeeper.application.dtos.role import RoleResult

ComputeFn = Callable[[], Awaitable[Any]]


# Cache backend interface
class ICacheBackend(Protocol):
    """Key-value cache with optional tag-scoped invalidation."""

    @property
    def supports_tags(self) -> bool:
        """Return True if remember()/flush_tag() honour the tag argument."""

    async def remember(
        self, key: str, ttl: int, compute: ComputeFn, tag: str | None = None
    ) -> Any:
        """Return the cached value for key, or compute, store for ttl seconds, and return it."""

    async def flush_tag(self, tag: str) -> None:
        """Drop every entry stored under tag."""

    async def clear(self) -> None:
        """Drop every entry."""


# Entity lifecycle hooks interface
class ILifecycleHooks(Protocol):
    """Hooks the persistence layer calls around principal/role writes."""

    async def before_delete(self, entity_type: str, entity_id: str) -> None:
        """Cascade relation rows unless the entity type is soft-deletable."""

    async def on_save(self, entity_type: str, entity_id: str, saved: bool) -> bool:
        """Invalidate after a successful insert or update. Returns saved."""

    async def on_delete(self, entity_type: str, entity_id: str, deleted: bool) -> bool:
        """Invalidate after a successful delete. Returns deleted."""

    async def on_restore(self, entity_type: str, entity_id: str, restored: bool) -> bool:
        """Invalidate after a soft delete is reversed. Returns restored."""


# Read-through cache interface (consumed by resolvers and the mutation coordinator)
class IReadThroughCache(Protocol):
    """Cache layer contract: compute on miss, invalidate by tag."""

    async def get_or_compute(
        self, key: str, tag: str, compute: ComputeFn, ttl: int | None = None
    ) -> Any:
        """Return cached value for key, or compute and store it under tag."""

    async def invalidate(self, tag: str) -> None:
        """Drop every entry under tag (no-op when the backend cannot tag)."""


# Role resolver interface
class IRoleResolver(Protocol):
    """Protocol for resolving a principal's effective roles (cached)."""

    async def resolve_roles(self, principal_id: str) -> list[RoleResult]:
        """Return the roles assigned to the principal."""


# Permission resolver interface
class IPermissionResolver(Protocol):
    """Protocol for resolving a role's effective permissions (cached)."""

    async def resolve_permissions(self, role_id: str) -> list[PermissionResult]:
        """Return the permissions granted to the role."""
