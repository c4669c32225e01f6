"""Redis-based tagged cache for resolved role and permission snapshots.

Tags are namespace versions: ``tag:<name>`` holds a random version token
and every entry stored under the tag embeds the token in its key.
Flushing a tag writes a new token in one SET, which makes every entry of
the old generation unreachable at once; those entries then expire with
their TTL. Values are JSON-serialized.

When Redis is unreachable the cache degrades to computing on every read
and logs a warning; it never raises to the caller. A flush that could not
be applied is retried before the next read and after a reconnect.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis

from gatekeeper.application.interfaces.services import ComputeFn
from gatekeeper.core.config import Settings, get_settings
from gatekeeper.infrastructure.cache.keys import tag_version_key, tagged_entry_key
from gatekeeper.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


class RedisTaggedCache:
    """Async Redis cache with TTL and tag-scoped invalidation.

    Call connect() at startup and disconnect() at shutdown, or pass a
    ready client for tests and DI.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize cache.

        Args:
            redis_client: Optional Redis client for testing or DI; treated as connected.
            settings: Settings for connection parameters (defaults to get_settings()).
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._connected = redis_client is not None
        # tags whose flush failed; re-applied once Redis answers again
        self._unflushed: set[str] = set()

    @property
    def supports_tags(self) -> bool:
        return True

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self.redis is not None:
            return
        try:
            self.redis = redis.Redis(
                host=self.settings.redis_host,
                port=self.settings.redis_port,
                db=self.settings.redis_db,
                password=(
                    self.settings.redis_password.get_secret_value()
                    if self.settings.redis_password
                    else None
                ),
                decode_responses=True,
                socket_connect_timeout=5,
                socket_keepalive=True,
            )
            await self.redis.ping()
            self._connected = True
            logger.info(
                "Redis cache connected: %s:%s",
                self.settings.redis_host,
                self.settings.redis_port,
            )
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Cache disabled.", e)
            self._connected = False
            self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    async def _reconnect(self) -> bool:
        """Attempt to reconnect after a dropped connection. Returns True if reconnected."""
        if self.redis is None:
            return False
        try:
            await self.redis.aclose()
        except redis.RedisError:
            logger.debug("Ignoring error while closing dropped Redis connection")
        self.redis = None
        self._connected = False
        await self.connect()
        if self._connected:
            await self._retry_unflushed()
        return self._connected

    async def _retry_unflushed(self) -> None:
        """Re-apply tag flushes that failed while Redis was unreachable."""
        for tag in sorted(self._unflushed):
            try:
                await self.redis.set(tag_version_key(tag), generate_cuid())
            except redis.RedisError:
                logger.warning("Cache flush retry for tag %s failed", tag)
                return
            self._unflushed.discard(tag)
            logger.info("Cache INVALIDATE: tag %s (retried)", tag)

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def _execute(
        self, operation: str, run: Callable[[], Awaitable[T]], default: T
    ) -> T:
        """Run a Redis call; on connection loss reconnect and retry once.

        Returns default when Redis is unavailable or the call fails.
        """
        if not self.is_available():
            return default
        try:
            return await run()
        except (redis.ConnectionError, redis.TimeoutError):
            if await self._reconnect():
                try:
                    return await run()
                except redis.RedisError:
                    logger.exception("Cache %s error after reconnect", operation)
                    return default
            logger.warning("Cache %s unavailable (Redis disconnected)", operation)
            return default
        except redis.RedisError:
            logger.exception("Cache %s error", operation)
            return default

    async def _tag_version(self, tag: str) -> str | None:
        """Return the current version token of tag, creating one if absent."""
        version_key = tag_version_key(tag)

        async def run() -> str | None:
            version = await self.redis.get(version_key)
            if version is None:
                await self.redis.set(version_key, generate_cuid(), nx=True)
                version = await self.redis.get(version_key)
            return version

        return await self._execute("tag version", run, None)

    async def remember(
        self, key: str, ttl: int, compute: ComputeFn, tag: str | None = None
    ) -> Any:
        """Return cached value for key under tag, or compute and store it.

        Args:
            key: Cache key (use gatekeeper.infrastructure.cache.keys builders).
            ttl: Time-to-live in seconds; <= 0 computes without storing.
            compute: Async callable producing a JSON-serializable value.
            tag: Optional tag; entries under a tag are dropped by flush_tag().
        """
        if self._unflushed and self.is_available():
            await self._retry_unflushed()
        entry_key = key
        if tag is not None:
            version = await self._tag_version(tag)
            if version is None:
                return await compute()
            entry_key = tagged_entry_key(tag, version, key)

        async def read() -> Any:
            raw = await self.redis.get(entry_key)
            return _MISSING if raw is None else json.loads(raw)

        cached = await self._execute("get", read, _MISSING)
        if cached is not _MISSING:
            logger.debug("Cache HIT: %s", entry_key)
            return cached
        logger.debug("Cache MISS: %s", entry_key)
        value = await compute()
        if ttl > 0:
            serialized = json.dumps(value)

            async def write() -> bool:
                await self.redis.setex(entry_key, ttl, serialized)
                return True

            if await self._execute("set", write, False):
                logger.debug("Cache SET: %s (TTL: %ss)", entry_key, ttl)
        return value

    async def flush_tag(self, tag: str) -> None:
        """Rotate the version token of tag so its entries are no longer reachable."""

        async def run() -> bool:
            await self.redis.set(tag_version_key(tag), generate_cuid())
            return True

        if await self._execute("flush", run, False):
            self._unflushed.discard(tag)
            logger.info("Cache INVALIDATE: tag %s", tag)
        else:
            self._unflushed.add(tag)
            logger.warning("Cache flush for tag %s not applied; retried on next use", tag)

    async def clear(self) -> None:
        """Clear the whole Redis database. Use with caution."""

        async def run() -> bool:
            await self.redis.flushdb()
            return True

        if await self._execute("clear", run, False):
            logger.warning("Cache CLEARED: all keys deleted")
