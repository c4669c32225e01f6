"""ORM models for the reference assignment store."""

from gatekeeper.infrastructure.persistence.models.mixins import (
    CuidMixin,
    SoftDeleteMixin,
    TimestampMixin,
)
from gatekeeper.infrastructure.persistence.models.permission import (
    Permission,
    RolePermission,
    UserRole,
)
from gatekeeper.infrastructure.persistence.models.principal import Principal
from gatekeeper.infrastructure.persistence.models.role import Role

__all__ = [
    "CuidMixin",
    "SoftDeleteMixin",
    "TimestampMixin",
    "Permission",
    "Principal",
    "Role",
    "RolePermission",
    "UserRole",
]
