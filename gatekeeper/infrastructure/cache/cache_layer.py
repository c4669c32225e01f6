"""Read-through cache layer used by the role and permission resolvers.

Routes entries to the active backend when it can group them by tag, and
to a per-instance ArrayCache with a zero TTL otherwise. In the fallback
path invalidate() is a no-op: nothing is retained that could go stale.
"""

from __future__ import annotations

import logging
from typing import Any

from gatekeeper.application.interfaces.services import ComputeFn, ICacheBackend
from gatekeeper.infrastructure.cache.array_cache import ArrayCache

logger = logging.getLogger(__name__)

_FALLBACK_TTL = 0


class CacheLayer:
    """get_or_compute / invalidate over a tag-capable or plain backend."""

    def __init__(self, backend: ICacheBackend, default_ttl: int = 60) -> None:
        """Initialize the layer.

        Args:
            backend: Active cache backend; tagging is used only if backend.supports_tags.
            default_ttl: TTL in seconds applied when get_or_compute() gets none.
        """
        self.backend = backend
        self.default_ttl = default_ttl
        self._fallback = ArrayCache()

    @property
    def supports_tags(self) -> bool:
        return self.backend.supports_tags

    async def get_or_compute(
        self,
        key: str,
        tag: str,
        compute: ComputeFn,
        ttl: int | None = None,
    ) -> Any:
        """Return the cached value for key, computing and storing it on a miss.

        Args:
            key: Cache key.
            tag: Group the entry belongs to (relation name).
            compute: Async callable deriving the value from the store.
            ttl: Seconds to keep the entry (defaults to default_ttl).
        """
        if self.backend.supports_tags:
            return await self.backend.remember(
                key, self.default_ttl if ttl is None else ttl, compute, tag=tag
            )
        return await self._fallback.remember(key, _FALLBACK_TTL, compute)

    async def invalidate(self, tag: str) -> None:
        """Drop every entry under tag. No-op when the backend cannot tag."""
        if self.backend.supports_tags:
            await self.backend.flush_tag(tag)
        else:
            logger.debug("Cache backend has no tag support; skip flush of %s", tag)
