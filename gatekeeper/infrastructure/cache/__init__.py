"""Cache: tagged backends, fallback store, and the read-through layer.

RedisTaggedCache and MemoryTaggedCache support tag-scoped invalidation;
ArrayCache does not and is the fallback. Key format is in keys.py (DRY).
"""

from gatekeeper.infrastructure.cache.array_cache import ArrayCache
from gatekeeper.infrastructure.cache.cache_layer import CacheLayer
from gatekeeper.infrastructure.cache.factory import create_cache_backend
from gatekeeper.infrastructure.cache.keys import permissions_key, roles_key
from gatekeeper.infrastructure.cache.memory_cache import MemoryTaggedCache
from gatekeeper.infrastructure.cache.redis_cache import RedisTaggedCache

__all__ = [
    "ArrayCache",
    "CacheLayer",
    "MemoryTaggedCache",
    "RedisTaggedCache",
    "create_cache_backend",
    "permissions_key",
    "roles_key",
]
