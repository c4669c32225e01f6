"""FastAPI dependencies: session, services and route guards (composition root).

The current principal is supplied by the host application: override
get_current_principal_id via app.dependency_overrides with whatever the
app's authentication resolves to. Guards raise AuthorizationException,
which register_exception_handlers() maps to 403.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from gatekeeper.application.services.assignment_service import AssignmentService
from gatekeeper.application.services.authorization_service import (
    AuthorizationService,
    NameOrNames,
)
from gatekeeper.container import GatekeeperContainer, GatekeeperServices
from gatekeeper.domain.exceptions import ConfigurationException


async def get_current_principal_id() -> str:
    """Placeholder identity source; applications override it. Raises 401."""
    raise HTTPException(status_code=401, detail="Not authenticated")


def get_container(request: Request) -> GatekeeperContainer:
    """Return the started container from app.state.gatekeeper."""
    container = getattr(request.app.state, "gatekeeper", None)
    if container is None or container.session_factory is None:
        raise ConfigurationException(
            "Gatekeeper container is not started on app.state.gatekeeper", "gatekeeper"
        )
    return container


async def get_session(
    container: Annotated[GatekeeperContainer, Depends(get_container)],
) -> AsyncIterator[AsyncSession]:
    """Yield a transactional session; commit on success, roll back on error.

    Cache tags touched by the request are invalidated again after the
    transaction ends.
    """
    async with container.session_scope() as session:
        yield session


def get_services(
    container: Annotated[GatekeeperContainer, Depends(get_container)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> GatekeeperServices:
    """Services bound to the request session."""
    return container.services(session)


def get_authorization_service(
    services: Annotated[GatekeeperServices, Depends(get_services)],
) -> AuthorizationService:
    return services.authorization


def get_assignment_service(
    services: Annotated[GatekeeperServices, Depends(get_services)],
) -> AssignmentService:
    return services.assignments


def require_roles(*names: str, require_all: bool = False):
    """Dependency factory: require the current principal to hold any (or all) of names."""

    async def _require(
        principal_id: Annotated[str, Depends(get_current_principal_id)],
        auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    ) -> str:
        await auth_svc.require_role(principal_id, list(names), require_all)
        return principal_id

    return _require


def require_permissions(*names: str, require_all: bool = False):
    """Dependency factory: require any (or all) of the permission patterns."""

    async def _require(
        principal_id: Annotated[str, Depends(get_current_principal_id)],
        auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    ) -> str:
        await auth_svc.require_permission(principal_id, list(names), require_all)
        return principal_id

    return _require


def require_ability(
    roles: NameOrNames, permissions: NameOrNames, validate_all: bool = False
):
    """Dependency factory: require ability(roles, permissions) to hold."""

    async def _require(
        principal_id: Annotated[str, Depends(get_current_principal_id)],
        auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    ) -> str:
        await auth_svc.require_ability(principal_id, roles, permissions, validate_all)
        return principal_id

    return _require
