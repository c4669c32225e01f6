"""Principal repository: lifecycle-aware persistence of principals."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from gatekeeper.application.interfaces.services import ILifecycleHooks
from gatekeeper.infrastructure.persistence.models.principal import Principal
from gatekeeper.infrastructure.persistence.repositories.base import BaseRepository


class PrincipalRepository(BaseRepository[Principal]):
    """Principal repository. Principals are soft-deleted by default."""

    def __init__(
        self,
        db: AsyncSession,
        entity_type: str,
        hooks: ILifecycleHooks | None = None,
        model: type[Principal] = Principal,
    ) -> None:
        super().__init__(db, model, entity_type, hooks)
