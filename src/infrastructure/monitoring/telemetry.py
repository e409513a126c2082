"""OpenTelemetry tracing for the search path."""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import structlog
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Status, StatusCode

from src.shared.config.settings import Settings

logger = structlog.get_logger(__name__)

# Global tracer instance
_tracer: trace.Tracer | None = None


def setup_telemetry(settings: Settings) -> bool:
    """Initialize OpenTelemetry when an OTLP endpoint is configured.

    Args:
        settings: Application settings

    Returns:
        True if a tracer provider was installed
    """
    global _tracer

    endpoint = settings.monitoring.otel_exporter_otlp_endpoint
    if not endpoint:
        logger.info("OpenTelemetry disabled, no OTLP endpoint configured")
        return False

    resource = Resource.create(
        {
            "service.name": settings.monitoring.otel_service_name,
            "service.version": settings.app_version,
            "deployment.environment": settings.environment,
        }
    )

    provider = TracerProvider(resource=resource)
    provider.add_span_processor(
        BatchSpanProcessor(
            OTLPSpanExporter(
                endpoint=endpoint,
                # insecure should only be True for local development
                insecure=settings.environment in ("local", "development"),
            )
        )
    )
    trace.set_tracer_provider(provider)

    _tracer = trace.get_tracer(__name__)
    logger.info("OpenTelemetry OTLP exporter configured", endpoint=endpoint)
    return True


def get_tracer() -> trace.Tracer:
    """Get the configured tracer instance."""
    if _tracer is None:
        # No-op tracer until setup_telemetry installs a provider
        return trace.get_tracer(__name__)
    return _tracer


@contextmanager
def trace_span(
    name: str,
    attributes: dict[str, Any] | None = None,
    kind: trace.SpanKind = trace.SpanKind.INTERNAL,
) -> Generator[trace.Span]:
    """Context manager for creating a traced span."""
    tracer = get_tracer()
    with tracer.start_as_current_span(
        name,
        kind=kind,
        attributes=attributes or {},
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        try:
            yield span
        except Exception as e:
            span.record_exception(e)
            span.set_status(Status(StatusCode.ERROR, str(e)))
            raise


def add_span_attributes(attributes: dict[str, Any]) -> None:
    """Add attributes to the current span."""
    span = trace.get_current_span()
    if span and span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(key, value)
