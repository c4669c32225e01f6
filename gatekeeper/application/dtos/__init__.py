"""Application DTOs: read-models and query options (no ORM dependency)."""

from gatekeeper.application.dtos.ability import (
    AbilityOptions,
    AbilityReport,
    AbilityResult,
)
from gatekeeper.application.dtos.permission import PermissionResult
from gatekeeper.application.dtos.role import RoleResult

__all__ = [
    "AbilityOptions",
    "AbilityReport",
    "AbilityResult",
    "PermissionResult",
    "RoleResult",
]
