"""Tests for domain exceptions (error_code, message, details)."""

from gatekeeper.domain.exceptions import (
    AuthorizationException,
    ConfigurationException,
    GatekeeperException,
    InvalidArgumentException,
    ResourceNotFoundException,
)


def test_gatekeeper_exception_default_error_code() -> None:
    """Base GatekeeperException uses class name as error_code when not provided."""
    exc = GatekeeperException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "GatekeeperException"
    assert exc.details == {}


def test_gatekeeper_exception_custom_error_code_and_details() -> None:
    exc = GatekeeperException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.error_code == "CUSTOM"
    assert exc.details == {"key": "value"}
    assert str(exc) == "Oops"


def test_invalid_argument_exception_with_argument() -> None:
    """InvalidArgumentException sets INVALID_ARGUMENT and the argument name in details."""
    exc = InvalidArgumentException("bad option", argument="return_type")
    assert exc.error_code == "INVALID_ARGUMENT"
    assert exc.details == {"argument": "return_type"}


def test_invalid_argument_exception_without_argument() -> None:
    exc = InvalidArgumentException("bad")
    assert exc.details == {}


def test_authorization_exception_default() -> None:
    """AuthorizationException with no requirement uses default message."""
    exc = AuthorizationException()
    assert exc.message == "Permission denied"
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.details == {}


def test_authorization_exception_with_requirement() -> None:
    exc = AuthorizationException(principal_id="p1", requirement="role:admin")
    assert exc.message == "Permission denied: role:admin"
    assert exc.details == {"principal_id": "p1", "requirement": "role:admin"}


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException("role", "r-404")
    assert exc.message == "role not found: r-404"
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details == {"resource_type": "role", "resource_id": "r-404"}


def test_configuration_exception() -> None:
    exc = ConfigurationException("Unknown relation: 'x'", "relation")
    assert exc.error_code == "CONFIGURATION_ERROR"
    assert exc.details == {"setting": "relation"}


def test_to_dict() -> None:
    """to_dict() returns error, message, details for JSON responses."""
    exc = ResourceNotFoundException("permission", "p-1")
    assert exc.to_dict() == {
        "error": "RESOURCE_NOT_FOUND",
        "message": "permission not found: p-1",
        "details": {"resource_type": "permission", "resource_id": "p-1"},
    }


def test_all_subclass_gatekeeper_exception() -> None:
    for exc in (
        InvalidArgumentException("x"),
        AuthorizationException(),
        ResourceNotFoundException("role", "1"),
        ConfigurationException("x"),
    ):
        assert isinstance(exc, GatekeeperException)
