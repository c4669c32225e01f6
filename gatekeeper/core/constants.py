"""Core constants: cache key prefixes and shared literal values.

Single source of truth for cache key structure (DRY). Used by the
cache key builders and the resolvers.
"""

# Cache key prefixes (joined with CACHE_KEY_SEP and the owning id)
CACHE_PREFIX_ROLES = "roles_for"
CACHE_PREFIX_PERMISSIONS = "permissions_for"

# Delimiter for composite keys
CACHE_KEY_SEP = "_"

# Redis key prefix holding the current version token of a cache tag
CACHE_TAG_PREFIX = "tag"

CACHE_BACKEND_REDIS = "redis"
CACHE_BACKEND_MEMORY = "memory"
CACHE_BACKEND_ARRAY = "array"
CACHE_BACKENDS = (CACHE_BACKEND_REDIS, CACHE_BACKEND_MEMORY, CACHE_BACKEND_ARRAY)

# ability() options
RETURN_TYPE_BOOLEAN = "boolean"
RETURN_TYPE_ARRAY = "array"
RETURN_TYPE_BOTH = "both"
RETURN_TYPES = (RETURN_TYPE_BOOLEAN, RETURN_TYPE_ARRAY, RETURN_TYPE_BOTH)

# Separator for comma-separated role/permission lists
NAME_LIST_SEP = ","
