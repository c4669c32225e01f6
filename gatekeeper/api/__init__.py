"""FastAPI integration: route guards, exception handlers, lifespan."""

from gatekeeper.api.dependencies import (
    get_assignment_service,
    get_authorization_service,
    get_container,
    get_current_principal_id,
    get_services,
    get_session,
    require_ability,
    require_permissions,
    require_roles,
)
from gatekeeper.api.exception_handlers import register_exception_handlers
from gatekeeper.api.lifespan import create_lifespan

__all__ = [
    "create_lifespan",
    "get_assignment_service",
    "get_authorization_service",
    "get_container",
    "get_current_principal_id",
    "get_services",
    "get_session",
    "register_exception_handlers",
    "require_ability",
    "require_permissions",
    "require_roles",
]
