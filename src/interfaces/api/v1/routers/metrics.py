"""Metrics API endpoint for monitoring and observability.

This module provides endpoints for accessing search performance metrics
and the state of the search cache.
"""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from src.application.ports import CachePort
from src.infrastructure.monitoring import get_metrics
from src.interfaces.api.dependencies import get_cache

router = APIRouter()


class MetricsResponse(BaseModel):
    """Response model for metrics endpoint."""

    total_queries: int = Field(..., description="Total number of store queries")
    failed_queries: int = Field(..., description="Number of failed store queries")
    success_rate: float = Field(..., description="Query success rate percentage")
    average_latency_ms: float | None = Field(
        None, description="Average query latency in milliseconds"
    )
    p95_latency_ms: float | None = Field(
        None, description="95th percentile latency in milliseconds"
    )
    cache_hit_rate: float = Field(..., description="Cache hit rate percentage")
    cache_hits: int = Field(..., description="Number of cache hits")
    cache_misses: int = Field(..., description="Number of cache misses")
    cache_errors: int = Field(..., description="Cache reads/writes that failed")
    cache: dict[str, Any] = Field(..., description="Cache backend statistics")
    uptime_seconds: float = Field(..., description="Service uptime in seconds")


@router.get(
    "/performance",
    response_model=MetricsResponse,
    summary="Get performance metrics",
    description="Retrieve current search metrics and cache statistics",
)
async def get_performance_metrics(
    cache: CachePort | None = Depends(get_cache),  # noqa: B008
) -> MetricsResponse:
    """Get current performance metrics.

    Returns:
        MetricsResponse with current metrics
    """
    metrics_dict = get_metrics().to_dict()
    cache_stats = await cache.get_stats() if cache is not None else {"backend": "none"}

    return MetricsResponse(
        total_queries=metrics_dict["total_queries"],
        failed_queries=metrics_dict["failed_queries"],
        success_rate=metrics_dict["success_rate"],
        average_latency_ms=metrics_dict["average_latency_ms"],
        p95_latency_ms=metrics_dict["p95_latency_ms"],
        cache_hit_rate=metrics_dict["cache_hit_rate"],
        cache_hits=metrics_dict["cache_hits"],
        cache_misses=metrics_dict["cache_misses"],
        cache_errors=metrics_dict["cache_errors"],
        cache=cache_stats,
        uptime_seconds=metrics_dict["uptime_seconds"],
    )
