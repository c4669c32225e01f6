"""DTOs for permission use cases (no dependency on ORM)."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class PermissionResult:
    """Permission read-model (resolved snapshot held by the cache)."""

    id: str
    name: str
    display_name: str | None = None
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PermissionResult":
        return cls(**data)
