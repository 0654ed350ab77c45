"""
kbengine Observability Module

Provides distributed tracing support using OpenTelemetry and loguru
logging setup.
"""

from .decorators import trace_span
from .logs import configure_logging
from .tracer import (
    get_tracer,
    init_tracer,
    is_tracing_enabled,
    shutdown_tracer,
)

__all__ = [
    "configure_logging",
    "init_tracer",
    "get_tracer",
    "shutdown_tracer",
    "is_tracing_enabled",
    "trace_span",
]
