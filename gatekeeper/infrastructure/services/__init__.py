"""Infrastructure services: cached role and permission resolvers."""

from gatekeeper.infrastructure.services.permission_resolver import PermissionResolver
from gatekeeper.infrastructure.services.role_resolver import RoleResolver

__all__ = ["PermissionResolver", "RoleResolver"]
