"""Tests for the tracing decorator, telemetry setup and error status mapping."""

import pytest
from opentelemetry.sdk.trace import TracerProvider

from gatekeeper.api.exception_handlers import status_for
from gatekeeper.domain.exceptions import (
    AuthorizationException,
    ConfigurationException,
    GatekeeperException,
    InvalidArgumentException,
    ResourceNotFoundException,
)
from gatekeeper.shared.telemetry.telemetry import setup_telemetry
from gatekeeper.shared.telemetry.tracing import add_span_attributes, traced


@traced("test.sync")
def double(value: int) -> int:
    return value * 2


@traced()
async def fail(principal_id: str) -> None:
    raise ValueError(principal_id)


async def test_traced_preserves_results_and_errors() -> None:
    assert double(4) == 8
    assert fail.__name__ == "fail"
    with pytest.raises(ValueError, match="p1"):
        await fail(principal_id="p1")


def test_add_span_attributes_without_span_is_noop() -> None:
    add_span_attributes(**{"gatekeeper.test": True})


def test_setup_telemetry_disabled(settings) -> None:
    assert setup_telemetry(settings) is None


def test_setup_telemetry_enabled_without_exporter(make_settings) -> None:
    provider = setup_telemetry(
        make_settings(telemetry_enabled=True, telemetry_exporter="none")
    )
    assert isinstance(provider, TracerProvider)
    provider.shutdown()


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (AuthorizationException("p1", "role:admin"), 403),
        (InvalidArgumentException("bad"), 400),
        (ResourceNotFoundException("role", "r1"), 404),
        (ConfigurationException("bad"), 500),
        (GatekeeperException("other"), 400),
    ],
)
def test_status_for(exc: GatekeeperException, status: int) -> None:
    assert status_for(exc) == status
