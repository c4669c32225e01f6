"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from gatekeeper.shared.telemetry.logging import get_logger, setup_logging
from gatekeeper.shared.telemetry.telemetry import setup_telemetry
from gatekeeper.shared.telemetry.tracing import add_span_attributes, traced

__all__ = [
    "setup_logging",
    "get_logger",
    "setup_telemetry",
    "traced",
    "add_span_attributes",
]
