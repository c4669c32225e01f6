"""Repositories for the reference SQL assignment store."""

from gatekeeper.infrastructure.persistence.repositories.assignment_store import (
    SqlAssignmentStore,
    permission_to_result,
)
from gatekeeper.infrastructure.persistence.repositories.base import BaseRepository
from gatekeeper.infrastructure.persistence.repositories.pivot_repo import PivotRepository
from gatekeeper.infrastructure.persistence.repositories.principal_repo import (
    PrincipalRepository,
)
from gatekeeper.infrastructure.persistence.repositories.role_permission_repo import (
    RolePermissionRepository,
)
from gatekeeper.infrastructure.persistence.repositories.role_repo import (
    RoleRepository,
    role_to_result,
)
from gatekeeper.infrastructure.persistence.repositories.user_role_repo import (
    UserRoleRepository,
)

__all__ = [
    "BaseRepository",
    "PivotRepository",
    "PrincipalRepository",
    "RolePermissionRepository",
    "RoleRepository",
    "SqlAssignmentStore",
    "UserRoleRepository",
    "permission_to_result",
    "role_to_result",
]
