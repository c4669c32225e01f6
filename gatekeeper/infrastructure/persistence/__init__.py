"""Persistence: SQLAlchemy models, session factory and the SQL assignment store."""

from gatekeeper.infrastructure.persistence.database import (
    Base,
    create_engine_and_sessionmaker,
    create_schema,
    pending_tags,
    session_scope,
)

__all__ = [
    "Base",
    "create_engine_and_sessionmaker",
    "create_schema",
    "pending_tags",
    "session_scope",
]
