"""gatekeeper: cached role and permission checks for async Python services."""

from gatekeeper.application.services import AssignmentService, AuthorizationService
from gatekeeper.container import GatekeeperContainer, GatekeeperServices
from gatekeeper.core.config import Settings, get_settings

__all__ = [
    "AssignmentService",
    "AuthorizationService",
    "GatekeeperContainer",
    "GatekeeperServices",
    "Settings",
    "get_settings",
]
