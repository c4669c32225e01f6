"""Pytest configuration and fixtures for gatekeeper.

Unit tests use the settings fixture and mocks only. Integration tests run
against SQLite in memory (aiosqlite) through a started GatekeeperContainer
with the in-process tagged cache.
"""

from collections.abc import AsyncIterator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from gatekeeper.container import GatekeeperContainer, GatekeeperServices
from gatekeeper.core.config import Settings
from gatekeeper.infrastructure.cache.memory_cache import MemoryTaggedCache
from gatekeeper.infrastructure.persistence.database import create_schema
from gatekeeper.infrastructure.persistence.models import Permission, Principal, Role

RELATIONS = {
    "role_user_table": "role_user",
    "permission_role_table": "permission_role",
    "principal_entity": "principal",
    "role_entity": "role",
    "permission_entity": "permission",
}


def _make_settings(**overrides) -> Settings:
    """Settings with the conventional relation names; .env is not read."""
    return Settings(_env_file=None, **{**RELATIONS, **overrides})


@pytest.fixture
def make_settings():
    """Factory for Settings with overrides on top of the conventional relation names."""
    return _make_settings


@pytest.fixture
def settings() -> Settings:
    return _make_settings()


@pytest.fixture
def memory_cache() -> MemoryTaggedCache:
    return MemoryTaggedCache()


@pytest.fixture
async def container(
    settings: Settings, memory_cache: MemoryTaggedCache
) -> AsyncIterator[GatekeeperContainer]:
    """Started container over an in-memory database with the schema created."""
    gk = GatekeeperContainer(settings, cache_backend=memory_cache)
    await gk.startup()
    await create_schema(gk.engine)
    yield gk
    await gk.shutdown()


@pytest.fixture
async def db_session(container: GatekeeperContainer) -> AsyncIterator[AsyncSession]:
    """Session for store/repository tests. Rolls back after test."""
    async with container.session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def services(container: GatekeeperContainer, db_session: AsyncSession) -> GatekeeperServices:
    return container.services(db_session)


class Seeder:
    """Insert principals, roles and permissions directly (bypassing hooks)."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _add(self, obj):
        self.session.add(obj)
        await self.session.flush()
        return obj

    async def principal(self, name: str = "alice") -> Principal:
        return await self._add(Principal(name=name))

    async def role(self, name: str, **fields) -> Role:
        return await self._add(Role(name=name, **fields))

    async def permission(self, name: str, **fields) -> Permission:
        return await self._add(Permission(name=name, **fields))


@pytest.fixture
def seed(db_session: AsyncSession) -> Seeder:
    return Seeder(db_session)
