"""Monitoring and observability infrastructure for The Good Corner."""

from .performance_logger import (
    PerformanceMetrics,
    get_metrics,
    reset_metrics,
    track_cache_error,
    track_cache_hit,
    track_cache_miss,
    track_query_performance,
)
from .telemetry import (
    add_span_attributes,
    get_tracer,
    setup_telemetry,
    trace_span,
)

__all__ = [
    # Telemetry
    "setup_telemetry",
    "get_tracer",
    "trace_span",
    "add_span_attributes",
    # Performance
    "PerformanceMetrics",
    "get_metrics",
    "reset_metrics",
    "track_query_performance",
    "track_cache_hit",
    "track_cache_miss",
    "track_cache_error",
]
