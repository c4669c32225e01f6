"""Application layer: DTOs, interfaces, services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (store, cache, resolvers).
"""

from gatekeeper.application.interfaces import (
    IAssignmentStore,
    ICacheBackend,
    ILifecycleHooks,
    IPermissionResolver,
    IReadThroughCache,
    IRoleResolver,
)
from gatekeeper.application.services import AssignmentService, AuthorizationService

__all__ = [
    "AssignmentService",
    "AuthorizationService",
    "IAssignmentStore",
    "ICacheBackend",
    "ILifecycleHooks",
    "IPermissionResolver",
    "IReadThroughCache",
    "IRoleResolver",
]
