"""Tests for AbilityOptions validation."""

import pytest

from gatekeeper.application.dtos.ability import AbilityOptions
from gatekeeper.domain.exceptions import InvalidArgumentException


def test_defaults_when_missing() -> None:
    opts = AbilityOptions.from_mapping(None)
    assert opts.validate_all is False
    assert opts.return_type == "boolean"


def test_none_values_count_as_missing() -> None:
    opts = AbilityOptions.from_mapping({"validate_all": None, "return_type": None})
    assert opts == AbilityOptions()


@pytest.mark.parametrize("return_type", ["boolean", "array", "both"])
def test_valid_return_types(return_type: str) -> None:
    assert AbilityOptions.from_mapping({"return_type": return_type}).return_type == return_type


@pytest.mark.parametrize("validate_all", ["true", 1, 0, "yes"])
def test_validate_all_must_be_bool(validate_all) -> None:
    """validate_all accepts only real booleans."""
    with pytest.raises(InvalidArgumentException) as exc_info:
        AbilityOptions.from_mapping({"validate_all": validate_all})
    assert exc_info.value.details == {"argument": "validate_all"}


def test_unknown_return_type_rejected() -> None:
    with pytest.raises(InvalidArgumentException) as exc_info:
        AbilityOptions.from_mapping({"return_type": "xml"})
    assert exc_info.value.error_code == "INVALID_ARGUMENT"
    assert exc_info.value.details == {"argument": "return_type"}
