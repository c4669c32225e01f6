"""Domain value objects and shared value types."""

from gatekeeper.domain.value_objects.core import (
    EntityRef,
    IdRef,
    RecordRef,
    TargetRef,
    normalize_target,
    target_id,
)

__all__ = [
    "IdRef",
    "EntityRef",
    "RecordRef",
    "TargetRef",
    "normalize_target",
    "target_id",
]
