"""Build the configured cache backend (composition helper)."""

from __future__ import annotations

from gatekeeper.application.interfaces.services import ICacheBackend
from gatekeeper.core.config import Settings
from gatekeeper.core.constants import (
    CACHE_BACKEND_ARRAY,
    CACHE_BACKEND_MEMORY,
    CACHE_BACKEND_REDIS,
)
from gatekeeper.domain.exceptions import ConfigurationException
from gatekeeper.infrastructure.cache.array_cache import ArrayCache
from gatekeeper.infrastructure.cache.memory_cache import MemoryTaggedCache
from gatekeeper.infrastructure.cache.redis_cache import RedisTaggedCache


async def create_cache_backend(settings: Settings) -> ICacheBackend:
    """Return a ready backend for settings.cache_backend.

    Redis is connected here; if the connection fails the backend stays
    usable and computes on every read.
    """
    if settings.cache_backend == CACHE_BACKEND_REDIS:
        cache = RedisTaggedCache(settings=settings)
        await cache.connect()
        return cache
    if settings.cache_backend == CACHE_BACKEND_MEMORY:
        return MemoryTaggedCache()
    if settings.cache_backend == CACHE_BACKEND_ARRAY:
        return ArrayCache()
    raise ConfigurationException(
        f"Unknown cache backend: {settings.cache_backend!r}", "cache_backend"
    )
