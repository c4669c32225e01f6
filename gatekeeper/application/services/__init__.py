"""Application services: authorization checks and assignment mutations."""

from gatekeeper.application.services.assignment_service import AssignmentService
from gatekeeper.application.services.authorization_service import (
    AuthorizationService,
    check_names,
    split_names,
)

__all__ = [
    "AssignmentService",
    "AuthorizationService",
    "check_names",
    "split_names",
]
