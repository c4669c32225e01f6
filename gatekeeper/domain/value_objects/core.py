"""Domain value objects for gatekeeper.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.

TargetRef is the accepted shape of an attach/detach target: a bare
identity, an entity carrying an ``id`` attribute, or a mapping with an
``"id"`` key. normalize_target() is the single boundary that turns
caller input into one of these variants.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from gatekeeper.domain.exceptions import InvalidArgumentException

Identity = str | int


def _is_identity(value: Any) -> bool:
    """Return True for str/int identity values (bool is rejected)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, str):
        return bool(value)
    return isinstance(value, int)


@dataclass(frozen=True)
class IdRef:
    """Target given directly as its identity value."""

    value: Identity

    @property
    def id(self) -> Identity:
        return self.value


@dataclass(frozen=True)
class EntityRef:
    """Target given as an entity; its ``id`` attribute is the identity."""

    entity: Any

    @property
    def id(self) -> Identity:
        return self.entity.id


@dataclass(frozen=True)
class RecordRef:
    """Target given as a mapping shaped like ``{"id": ...}``."""

    record: Mapping[str, Any]

    @property
    def id(self) -> Identity:
        return self.record["id"]


TargetRef = IdRef | EntityRef | RecordRef


def normalize_target(value: Any, argument: str = "target") -> TargetRef:
    """Classify an attach/detach target. Raises InvalidArgumentException otherwise.

    Args:
        value: Identity, entity with ``id``, or mapping with ``"id"``.
        argument: Argument name for the error details.

    Returns:
        IdRef, EntityRef or RecordRef whose ``id`` is a valid identity.
    """
    if isinstance(value, IdRef | EntityRef | RecordRef):
        return value
    if isinstance(value, Mapping):
        if _is_identity(value.get("id")):
            return RecordRef(value)
        raise InvalidArgumentException(
            f"{argument} mapping must carry an 'id' identity", argument
        )
    if _is_identity(value):
        return IdRef(value)
    if _is_identity(getattr(value, "id", None)):
        return EntityRef(value)
    raise InvalidArgumentException(
        f"{argument} must be an id, an entity with an id, or a mapping with 'id'; "
        f"got {type(value).__name__}",
        argument,
    )


def target_id(value: Any, argument: str = "target") -> str:
    """Return the identity of a target as the string key used by the store."""
    return str(normalize_target(value, argument).id)
