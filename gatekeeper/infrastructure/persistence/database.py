"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

The reference assignment store runs on any SQLAlchemy async driver
(asyncpg in production, aiosqlite in tests). create_schema() is provided
for tests and single-file deployments; production schemas are expected
to be managed by the host application's migrations.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from gatekeeper.core.config import Settings

if TYPE_CHECKING:
    from gatekeeper.application.interfaces.services import IReadThroughCache

logger = logging.getLogger(__name__)

PENDING_TAGS_KEY = "gatekeeper.pending_tags"


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


def create_engine_and_sessionmaker(
    settings: Settings,
) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    """Create the async engine and session factory for settings.database_url."""
    engine_kwargs: dict[str, Any] = {"echo": settings.database_echo}
    if settings.database_url.startswith("sqlite"):
        if ":memory:" in settings.database_url:
            # one shared connection, otherwise every session sees an empty database
            engine_kwargs["poolclass"] = StaticPool
    else:
        engine_kwargs.update(pool_pre_ping=True, pool_recycle=3600)
    engine = create_async_engine(settings.database_url, **engine_kwargs)
    session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    logger.info("Assignment store engine created (echo=%s)", settings.database_echo)
    return engine, session_factory


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables known to Base.metadata (idempotent)."""
    from gatekeeper.infrastructure.persistence import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def pending_tags(session: AsyncSession) -> set[str]:
    """Cache tags invalidated during the session's current transaction."""
    return session.info.setdefault(PENDING_TAGS_KEY, set())


@asynccontextmanager
async def session_scope(
    session_factory: async_sessionmaker[AsyncSession],
    cache: IReadThroughCache | None = None,
) -> AsyncIterator[AsyncSession]:
    """Yield a session inside a transaction; commit on success, roll back on error.

    With a cache, every tag invalidated during the transaction is invalidated
    again once it has ended. Other sessions may have cached the rows as they
    were before the commit (or this session's rolled-back writes).
    """
    async with session_factory() as session:
        try:
            async with session.begin():
                yield session
        finally:
            if cache is not None:
                for tag in sorted(session.info.pop(PENDING_TAGS_KEY, ())):
                    await cache.invalidate(tag)
