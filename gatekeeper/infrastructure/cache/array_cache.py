"""In-process fallback cache without tag support.

Used when the active backend cannot group entries by tag. Entries are
held in a plain dict for the lifetime of the instance; a ttl of zero or
less means the value is computed and returned but not retained, so a
missing flush can never serve a stale snapshot.
"""

from __future__ import annotations

import logging
from typing import Any

from gatekeeper.application.interfaces.services import ComputeFn

logger = logging.getLogger(__name__)


class ArrayCache:
    """Unscoped dict store. flush_tag() is a no-op."""

    def __init__(self) -> None:
        self._store: dict[str, Any] = {}

    @property
    def supports_tags(self) -> bool:
        return False

    async def remember(
        self, key: str, ttl: int, compute: ComputeFn, tag: str | None = None
    ) -> Any:
        if key in self._store:
            logger.debug("Array cache HIT: %s", key)
            return self._store[key]
        value = await compute()
        if ttl > 0:
            self._store[key] = value
        return value

    async def flush_tag(self, tag: str) -> None:
        return None

    async def clear(self) -> None:
        self._store.clear()
