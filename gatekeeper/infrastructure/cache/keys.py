"""Cache key builders. Single place for key format (DRY).

Resolved snapshots are keyed ``roles_for_<principalId>`` and
``permissions_for_<roleId>``. The owning id is always the last component,
so ids may contain the separator without making keys ambiguous.
"""

from gatekeeper.core.constants import (
    CACHE_KEY_SEP,
    CACHE_PREFIX_PERMISSIONS,
    CACHE_PREFIX_ROLES,
    CACHE_TAG_PREFIX,
)


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).
    """
    if not value:
        raise ValueError(f"Cache key component {name!r} must be non-empty")


def roles_key(principal_id: str) -> str:
    """Cache key for the resolved roles of a principal."""
    _validate_key_component(principal_id, "principal_id")
    return f"{CACHE_PREFIX_ROLES}{CACHE_KEY_SEP}{principal_id}"


def permissions_key(role_id: str) -> str:
    """Cache key for the resolved permissions of a role."""
    _validate_key_component(role_id, "role_id")
    return f"{CACHE_PREFIX_PERMISSIONS}{CACHE_KEY_SEP}{role_id}"


def tag_version_key(tag: str) -> str:
    """Redis key holding the current version token of a tag."""
    _validate_key_component(tag, "tag")
    return f"{CACHE_TAG_PREFIX}:{tag}"


def tagged_entry_key(tag: str, version: str, key: str) -> str:
    """Redis key of an entry stored under a tag version."""
    return f"{tag}:{version}:{key}"
