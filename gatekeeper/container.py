"""Composition root: process-wide resources and per-session service wiring.

The cache backend and the database engine live for the whole process
(startup/shutdown). Store, resolvers and services are cheap and bound to
one AsyncSession, so services(session) builds a fresh bundle per unit of
work while sharing the cache.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from gatekeeper.application.interfaces.services import ICacheBackend
from gatekeeper.application.services.assignment_service import AssignmentService
from gatekeeper.application.services.authorization_service import AuthorizationService
from gatekeeper.core.config import Settings, get_settings
from gatekeeper.infrastructure.cache.cache_layer import CacheLayer
from gatekeeper.infrastructure.cache.factory import create_cache_backend
from gatekeeper.infrastructure.cache.redis_cache import RedisTaggedCache
from gatekeeper.infrastructure.persistence.database import (
    create_engine_and_sessionmaker,
    pending_tags,
    session_scope,
)
from gatekeeper.infrastructure.persistence.repositories.assignment_store import (
    SqlAssignmentStore,
)
from gatekeeper.infrastructure.persistence.repositories.principal_repo import (
    PrincipalRepository,
)
from gatekeeper.infrastructure.persistence.repositories.role_repo import RoleRepository
from gatekeeper.infrastructure.services.permission_resolver import PermissionResolver
from gatekeeper.infrastructure.services.role_resolver import RoleResolver
from gatekeeper.shared.telemetry.logging import setup_logging
from gatekeeper.shared.telemetry.telemetry import setup_telemetry

logger = logging.getLogger(__name__)


@dataclass
class GatekeeperServices:
    """Services bound to one session."""

    store: SqlAssignmentStore
    role_resolver: RoleResolver
    permission_resolver: PermissionResolver
    authorization: AuthorizationService
    assignments: AssignmentService
    principals: PrincipalRepository
    roles: RoleRepository


class GatekeeperContainer:
    """Owns the cache backend and the engine; builds per-session services."""

    def __init__(
        self,
        settings: Settings | None = None,
        cache_backend: ICacheBackend | None = None,
    ) -> None:
        """Initialize the container.

        Args:
            settings: Settings (defaults to get_settings()).
            cache_backend: Ready backend for tests and DI; built from settings otherwise.
        """
        self.settings = settings or get_settings()
        self.backend = cache_backend
        self.cache: CacheLayer | None = None
        self.engine: AsyncEngine | None = None
        self.session_factory: async_sessionmaker[AsyncSession] | None = None

    async def startup(self) -> None:
        """Configure logging and telemetry, then create the cache and the engine."""
        setup_logging(self.settings)
        setup_telemetry(self.settings)
        if self.backend is None:
            self.backend = await create_cache_backend(self.settings)
        self.cache = CacheLayer(self.backend, self.settings.cache_ttl)
        self.engine, self.session_factory = create_engine_and_sessionmaker(self.settings)
        logger.info(
            "Gatekeeper started: cache=%s ttl=%ss",
            type(self.backend).__name__,
            self.settings.cache_ttl,
        )

    async def shutdown(self) -> None:
        """Disconnect Redis (if used) and dispose the engine."""
        if isinstance(self.backend, RedisTaggedCache):
            await self.backend.disconnect()
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
            logger.info("Database engine disposed")

    def services(self, session: AsyncSession) -> GatekeeperServices:
        """Wire store, resolvers, services and lifecycle-aware repositories for session."""
        if self.cache is None:
            raise RuntimeError("GatekeeperContainer.startup() has not been called")
        settings = self.settings
        store = SqlAssignmentStore(session, settings)
        role_resolver = RoleResolver(store, self.cache, settings.role_user_table)
        permission_resolver = PermissionResolver(
            store, self.cache, settings.permission_role_table
        )
        assignments = AssignmentService(store, self.cache, settings, pending_tags(session))
        return GatekeeperServices(
            store=store,
            role_resolver=role_resolver,
            permission_resolver=permission_resolver,
            authorization=AuthorizationService(role_resolver, permission_resolver),
            assignments=assignments,
            principals=PrincipalRepository(session, settings.principal_entity, assignments),
            roles=RoleRepository(session, settings.role_entity, assignments),
        )

    def session_scope(self):
        """Transactional session that re-invalidates touched cache tags once it ends."""
        if self.session_factory is None:
            raise RuntimeError("GatekeeperContainer.startup() has not been called")
        return session_scope(self.session_factory, self.cache)
