"""OpenTelemetry tracer provider setup.

Uses the OTLP gRPC exporter or the console exporter. Without a call to
setup_telemetry() the global provider is the no-op default, so traced
calls cost almost nothing.
"""

import logging

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

from gatekeeper.core.config import Settings

logger = logging.getLogger(__name__)


def _build_exporter(settings: Settings) -> SpanExporter | None:
    exporter_type = settings.telemetry_exporter
    if exporter_type == "otlp" and settings.telemetry_otlp_endpoint:
        endpoint = settings.telemetry_otlp_endpoint
        logger.info("Using OTLP span exporter: %s", endpoint)
        return OTLPSpanExporter(endpoint=endpoint, insecure=endpoint.startswith("http://"))
    if exporter_type == "none":
        return None
    if exporter_type != "console":
        logger.warning("Unknown exporter type '%s', using console", exporter_type)
    return ConsoleSpanExporter()


def setup_telemetry(settings: Settings) -> TracerProvider | None:
    """Install a global tracer provider when telemetry is enabled.

    Returns:
        The provider, or None if telemetry is disabled.
    """
    if not settings.telemetry_enabled:
        logger.info("Telemetry disabled")
        return None
    resource = Resource(
        attributes={
            SERVICE_NAME: settings.app_name,
            SERVICE_VERSION: settings.app_version,
            "deployment.environment": settings.telemetry_environment,
        }
    )
    provider = TracerProvider(
        resource=resource, sampler=TraceIdRatioBased(settings.telemetry_sample_rate)
    )
    exporter = _build_exporter(settings)
    if exporter is not None:
        provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)
    logger.info(
        "OpenTelemetry initialized: service=%s, exporter=%s",
        settings.app_name,
        settings.telemetry_exporter,
    )
    return provider
