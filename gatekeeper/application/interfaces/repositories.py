"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from gatekeeper.application.dtos.permission import PermissionResult
    from gatekeeper.application.dtos.role import RoleResult


# Assignment store interface
class IAssignmentStore(Protocol):
    """Protocol for the authoritative principal-role / role-permission store.

    Relations are addressed by their configured join-table names; from_id is
    the owning side (principal for role_user, role for permission_role).
    """

    async def fetch_roles(self, principal_id: str) -> list[RoleResult]:
        """Return every role currently assigned to the principal."""

    async def fetch_permissions(self, role_id: str) -> list[PermissionResult]:
        """Return every permission currently granted to the role."""

    async def attach(self, relation: str, from_id: str, to_id: str) -> None:
        """Create the link; no-op when it exists. Raises ResourceNotFoundException."""

    async def detach(self, relation: str, from_id: str, to_id: str) -> None:
        """Remove the link if present. Raises ResourceNotFoundException."""

    async def sync(self, relation: str, from_id: str, to_ids: Sequence[str]) -> None:
        """Make the links of from_id exactly to_ids."""

    async def detach_all(self, relation: str, from_id: str) -> None:
        """Remove every link owned by from_id."""

    async def delete_cascade(self, entity_type: str, entity_id: str) -> None:
        """Remove every relation row referencing the entity, on either side."""

    def supports_soft_delete(self, entity_type: str) -> bool:
        """Return True if deleting this entity type keeps the row (soft delete)."""
