"""
OpenTelemetry Tracer Configuration

Provides initialization and management of OpenTelemetry tracing. Until
``init_tracer`` is called, spans go to the OpenTelemetry API's default
no-op provider.
"""

import os

from loguru import logger
from opentelemetry import trace
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
)

# Global state
_tracer: trace.Tracer | None = None
_tracer_provider: TracerProvider | None = None
_tracing_enabled = False


def is_tracing_enabled() -> bool:
    """Check if tracing is currently enabled."""
    return _tracing_enabled


def init_tracer(
    service_name: str = "kbengine",
    endpoint: str | None = None,
    enable_console_export: bool = False,
) -> bool:
    """
    Initialize OpenTelemetry tracer.

    Args:
        service_name: Name of the service for tracing.
        endpoint: OTLP endpoint URL (e.g., "http://localhost:4317").
                  If None, reads from OTEL_EXPORTER_OTLP_ENDPOINT env var.
        enable_console_export: If True, also export spans to stderr (for debugging).

    Returns:
        True once the tracer provider is installed.
    """
    global _tracer, _tracer_provider, _tracing_enabled

    endpoint = endpoint or os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")

    resource = Resource.create({SERVICE_NAME: service_name})
    _tracer_provider = TracerProvider(resource=resource)

    if endpoint:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

        _tracer_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint)))
        logger.info(f"OpenTelemetry OTLP exporter configured: {endpoint}")

    if enable_console_export:
        _tracer_provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
        logger.info("OpenTelemetry console exporter enabled")

    trace.set_tracer_provider(_tracer_provider)

    # Use our own provider even if a global one was already set
    _tracer = _tracer_provider.get_tracer(__name__)
    _tracing_enabled = True

    logger.info(f"OpenTelemetry tracer initialized for service: {service_name}")
    return True


def get_tracer() -> trace.Tracer:
    """
    Get the OpenTelemetry tracer instance.

    Returns the global (no-op by default) tracer if tracing is not initialized.
    """
    if _tracer is not None:
        return _tracer
    return trace.get_tracer(__name__)


def shutdown_tracer() -> None:
    """Shutdown the tracer and flush any pending spans."""
    global _tracer, _tracer_provider, _tracing_enabled

    if _tracer_provider is not None:
        try:
            _tracer_provider.shutdown()
            logger.info("OpenTelemetry tracer shut down")
        except Exception as e:
            logger.error(f"Error shutting down tracer: {e}")

    _tracer = None
    _tracer_provider = None
    _tracing_enabled = False
