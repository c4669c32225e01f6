"""DTOs for the ability() query: validated options and result types."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from gatekeeper.core.constants import RETURN_TYPE_BOOLEAN, RETURN_TYPES
from gatekeeper.domain.exceptions import InvalidArgumentException

# {"roles": {name: bool}, "permissions": {name: bool}}
AbilityReport = dict[str, dict[str, bool]]
AbilityResult = bool | AbilityReport | tuple[bool, AbilityReport]


@dataclass(frozen=True)
class AbilityOptions:
    """Options for ability(): validate_all (all-or-any) and return_type."""

    validate_all: bool = False
    return_type: str = RETURN_TYPE_BOOLEAN

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> "AbilityOptions":
        """Build options from a caller mapping, applying defaults for missing keys.

        A key present with value None counts as missing.

        Raises:
            InvalidArgumentException: validate_all is not a bool, or
                return_type is not one of boolean, array, both.
        """
        options = options or {}
        validate_all = options.get("validate_all")
        if validate_all is None:
            validate_all = False
        elif not isinstance(validate_all, bool):
            raise InvalidArgumentException(
                f"validate_all must be true or false, got {validate_all!r}",
                "validate_all",
            )
        return_type = options.get("return_type")
        if return_type is None:
            return_type = RETURN_TYPE_BOOLEAN
        elif return_type not in RETURN_TYPES:
            raise InvalidArgumentException(
                f"return_type must be one of {', '.join(RETURN_TYPES)}, got {return_type!r}",
                "return_type",
            )
        return cls(validate_all=validate_all, return_type=return_type)
