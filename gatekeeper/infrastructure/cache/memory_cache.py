"""In-process cache with TTL and tag-scoped invalidation.

Tag-capable backend for single-process deployments and tests. Each tag
owns its own dict of entries; flushing a tag replaces that dict in one
assignment, so concurrent readers on the event loop see either the old
group or an empty one, never a partial flush.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

from gatekeeper.application.interfaces.services import ComputeFn

logger = logging.getLogger(__name__)

_UNTAGGED = ""


class MemoryTaggedCache:
    """Dict-backed tagged cache; entries expire after ttl seconds."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize an empty cache.

        Args:
            clock: Monotonic time source (injectable for tests).
        """
        self._clock = clock
        self._groups: dict[str, dict[str, tuple[float, Any]]] = {}

    @property
    def supports_tags(self) -> bool:
        return True

    async def remember(
        self, key: str, ttl: int, compute: ComputeFn, tag: str | None = None
    ) -> Any:
        group_name = tag or _UNTAGGED
        group = self._groups.get(group_name, {})
        entry = group.get(key)
        if entry is not None:
            if entry[0] > self._clock():
                logger.debug("Cache HIT: %s [%s]", key, group_name)
                return entry[1]
            del group[key]
        logger.debug("Cache MISS: %s [%s]", key, group_name)
        value = await compute()
        if ttl > 0:
            self._groups.setdefault(group_name, {})[key] = (self._clock() + ttl, value)
        return value

    async def flush_tag(self, tag: str) -> None:
        dropped = len(self._groups.get(tag, {}))
        self._groups[tag] = {}
        logger.info("Cache INVALIDATE: tag %s (%s keys)", tag, dropped)

    async def clear(self) -> None:
        self._groups = {}
