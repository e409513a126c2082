"""Performance logging and monitoring for The Good Corner.

This module provides utilities for tracking store query latency and
search cache effectiveness.
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

logger = logging.getLogger(__name__)

# Queries slower than this are logged as warnings
SLOW_QUERY_THRESHOLD_MS = 500

# Only the most recent measurements are kept
MAX_SAMPLES = 1000


class PerformanceMetrics:
    """Container for performance metrics data."""

    def __init__(self):
        """Initialize metrics storage."""
        self.query_times: list[float] = []
        self.total_queries = 0
        self.failed_queries = 0
        self.cache_hits = 0
        self.cache_misses = 0
        self.cache_errors = 0
        self._start_time = time.time()

    def add_query_time(self, duration_ms: float):
        """Add a store query execution time."""
        self.query_times.append(duration_ms)
        self.total_queries += 1

        if len(self.query_times) > MAX_SAMPLES:
            self.query_times = self.query_times[-MAX_SAMPLES:]

    def add_failed_query(self):
        """Increment failed query counter."""
        self.total_queries += 1
        self.failed_queries += 1

    def add_cache_hit(self):
        """Increment cache hit counter."""
        self.cache_hits += 1

    def add_cache_miss(self):
        """Increment cache miss counter."""
        self.cache_misses += 1

    def add_cache_error(self):
        """Increment counter of cache reads/writes that raised."""
        self.cache_errors += 1

    def get_p95_latency(self) -> float | None:
        """Calculate P95 latency in milliseconds."""
        if not self.query_times:
            return None

        sorted_times = sorted(self.query_times)
        p95_index = int(len(sorted_times) * 0.95)
        return (
            sorted_times[p95_index]
            if p95_index < len(sorted_times)
            else sorted_times[-1]
        )

    def get_average_latency(self) -> float | None:
        """Calculate average latency in milliseconds."""
        if not self.query_times:
            return None
        return sum(self.query_times) / len(self.query_times)

    def get_cache_hit_rate(self) -> float:
        """Calculate cache hit rate as percentage."""
        total_cache_ops = self.cache_hits + self.cache_misses
        if total_cache_ops == 0:
            return 0.0
        return (self.cache_hits / total_cache_ops) * 100

    def get_success_rate(self) -> float:
        """Calculate query success rate as percentage."""
        if self.total_queries == 0:
            return 100.0
        return ((self.total_queries - self.failed_queries) / self.total_queries) * 100

    def get_uptime_seconds(self) -> float:
        """Get uptime in seconds."""
        return time.time() - self._start_time

    def to_dict(self) -> dict[str, Any]:
        """Convert metrics to dictionary format."""
        return {
            "total_queries": self.total_queries,
            "failed_queries": self.failed_queries,
            "success_rate": self.get_success_rate(),
            "average_latency_ms": self.get_average_latency(),
            "p95_latency_ms": self.get_p95_latency(),
            "cache_hit_rate": self.get_cache_hit_rate(),
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
            "cache_errors": self.cache_errors,
            "uptime_seconds": self.get_uptime_seconds(),
            "timestamp": datetime.now(UTC).isoformat(),
        }


# Global metrics instance
_metrics = PerformanceMetrics()


def get_metrics() -> PerformanceMetrics:
    """Get the global metrics instance."""
    return _metrics


def reset_metrics() -> None:
    """Replace the global metrics with a fresh instance."""
    global _metrics
    _metrics = PerformanceMetrics()


@asynccontextmanager
async def track_query_performance(operation: str, target: str | None = None):
    """Context manager for tracking store query performance.

    Args:
        operation: Name of the operation being tracked
        target: Optional description of what is queried (e.g. search text)

    Yields:
        None
    """
    start_time = time.time()

    try:
        yield
    except Exception as e:
        _metrics.add_failed_query()
        duration_ms = (time.time() - start_time) * 1000

        logger.error(
            f"Failed {operation}",
            extra={
                "operation": operation,
                "target": target,
                "duration_ms": duration_ms,
                "success": False,
                "error": str(e),
            },
        )
        raise

    duration_ms = (time.time() - start_time) * 1000
    _metrics.add_query_time(duration_ms)

    logger.info(
        f"Completed {operation}",
        extra={
            "operation": operation,
            "target": target,
            "duration_ms": duration_ms,
            "success": True,
        },
    )

    if duration_ms > SLOW_QUERY_THRESHOLD_MS:
        logger.warning(
            f"Slow query detected: {operation} took {duration_ms:.2f}ms",
            extra={
                "operation": operation,
                "target": target,
                "duration_ms": duration_ms,
            },
        )


# Cache tracking utilities
def track_cache_hit():
    """Record a cache hit."""
    _metrics.add_cache_hit()
    logger.debug("Cache hit")


def track_cache_miss():
    """Record a cache miss."""
    _metrics.add_cache_miss()
    logger.debug("Cache miss")


def track_cache_error():
    """Record a cache read or write that failed."""
    _metrics.add_cache_error()
