"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from gatekeeper.infrastructure or gatekeeper.api.
"""

from gatekeeper.application.interfaces.repositories import IAssignmentStore
from gatekeeper.application.interfaces.services import (
    ComputeFn,
    ICacheBackend,
    ILifecycleHooks,
    IPermissionResolver,
    IReadThroughCache,
    IRoleResolver,
)

__all__ = [
    "ComputeFn",
    "IAssignmentStore",
    "ICacheBackend",
    "ILifecycleHooks",
    "IPermissionResolver",
    "IReadThroughCache",
    "IRoleResolver",
]
