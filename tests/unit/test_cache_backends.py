"""Tests for the in-process cache backends and the CacheLayer routing."""

from unittest.mock import AsyncMock

import pytest

from gatekeeper.infrastructure.cache.array_cache import ArrayCache
from gatekeeper.infrastructure.cache.cache_layer import CacheLayer
from gatekeeper.infrastructure.cache.keys import (
    permissions_key,
    roles_key,
    tag_version_key,
    tagged_entry_key,
)
from gatekeeper.infrastructure.cache.memory_cache import MemoryTaggedCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_key_builders() -> None:
    assert roles_key("p1") == "roles_for_p1"
    assert permissions_key("r_1") == "permissions_for_r_1"
    assert tag_version_key("role_user") == "tag:role_user"
    assert tagged_entry_key("role_user", "v1", "roles_for_p1") == "role_user:v1:roles_for_p1"


def test_key_builders_reject_empty_ids() -> None:
    with pytest.raises(ValueError, match="principal_id"):
        roles_key("")


class TestMemoryTaggedCache:
    async def test_remember_computes_once_within_ttl(self) -> None:
        cache = MemoryTaggedCache()
        compute = AsyncMock(return_value=[{"id": "r1"}])
        first = await cache.remember("roles_for_p1", 60, compute, tag="role_user")
        second = await cache.remember("roles_for_p1", 60, compute, tag="role_user")
        assert first == second == [{"id": "r1"}]
        compute.assert_awaited_once()

    async def test_entry_expires_after_ttl(self) -> None:
        clock = FakeClock()
        cache = MemoryTaggedCache(clock=clock)
        compute = AsyncMock(side_effect=[["old"], ["new"]])
        assert await cache.remember("k", 60, compute, tag="t") == ["old"]
        clock.now += 61
        assert await cache.remember("k", 60, compute, tag="t") == ["new"]

    async def test_expired_entry_is_evicted_on_miss(self) -> None:
        clock = FakeClock()
        cache = MemoryTaggedCache(clock=clock)
        await cache.remember("k", 60, AsyncMock(return_value=["old"]), tag="t")
        clock.now += 61
        await cache.remember("k", 0, AsyncMock(return_value=["new"]), tag="t")
        assert cache._groups["t"] == {}

    async def test_flush_tag_drops_only_that_tag(self) -> None:
        cache = MemoryTaggedCache()
        roles = AsyncMock(side_effect=[["a"], ["b"]])
        perms = AsyncMock(return_value=["p"])
        await cache.remember("roles_for_p1", 60, roles, tag="role_user")
        await cache.remember("permissions_for_r1", 60, perms, tag="permission_role")
        await cache.flush_tag("role_user")
        assert await cache.remember("roles_for_p1", 60, roles, tag="role_user") == ["b"]
        assert await cache.remember("permissions_for_r1", 60, perms, tag="permission_role") == ["p"]
        perms.assert_awaited_once()

    async def test_zero_ttl_is_not_retained(self) -> None:
        cache = MemoryTaggedCache()
        compute = AsyncMock(return_value=[])
        await cache.remember("k", 0, compute, tag="t")
        await cache.remember("k", 0, compute, tag="t")
        assert compute.await_count == 2

    async def test_clear(self) -> None:
        cache = MemoryTaggedCache()
        compute = AsyncMock(return_value=[])
        await cache.remember("k", 60, compute, tag="t")
        await cache.clear()
        await cache.remember("k", 60, compute, tag="t")
        assert compute.await_count == 2


class TestArrayCache:
    async def test_has_no_tag_support(self) -> None:
        assert ArrayCache().supports_tags is False

    async def test_positive_ttl_retains_until_clear(self) -> None:
        cache = ArrayCache()
        compute = AsyncMock(return_value=["x"])
        await cache.remember("k", 10, compute)
        await cache.flush_tag("anything")
        await cache.remember("k", 10, compute)
        compute.assert_awaited_once()
        await cache.clear()
        await cache.remember("k", 10, compute)
        assert compute.await_count == 2


class TestCacheLayer:
    async def test_tag_capable_backend_gets_tag_and_default_ttl(self) -> None:
        backend = AsyncMock()
        backend.supports_tags = True
        backend.remember.return_value = ["cached"]
        compute = AsyncMock()
        layer = CacheLayer(backend, default_ttl=60)

        result = await layer.get_or_compute("roles_for_p1", "role_user", compute)

        assert result == ["cached"]
        backend.remember.assert_awaited_once_with("roles_for_p1", 60, compute, tag="role_user")

    async def test_explicit_ttl_wins(self) -> None:
        backend = AsyncMock()
        backend.supports_tags = True
        layer = CacheLayer(backend, default_ttl=60)
        compute = AsyncMock()
        await layer.get_or_compute("k", "t", compute, ttl=5)
        backend.remember.assert_awaited_once_with("k", 5, compute, tag="t")

    async def test_invalidate_flushes_tag(self) -> None:
        backend = AsyncMock()
        backend.supports_tags = True
        await CacheLayer(backend).invalidate("permission_role")
        backend.flush_tag.assert_awaited_once_with("permission_role")

    async def test_plain_backend_uses_fallback_and_never_serves_stale(self) -> None:
        """Without tag support every read recomputes, so a no-op invalidate is safe."""
        backend = AsyncMock()
        backend.supports_tags = False
        layer = CacheLayer(backend)
        compute = AsyncMock(side_effect=[["before"], ["after"]])

        assert await layer.get_or_compute("roles_for_p1", "role_user", compute) == ["before"]
        await layer.invalidate("role_user")
        assert await layer.get_or_compute("roles_for_p1", "role_user", compute) == ["after"]
        backend.remember.assert_not_awaited()
        backend.flush_tag.assert_not_awaited()
