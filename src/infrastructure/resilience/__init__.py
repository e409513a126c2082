"""Resilience patterns for infrastructure layer.

This module provides the circuit breaker that keeps an unreachable cache
backend from slowing down every search.
"""

from src.infrastructure.resilience.circuit_breaker import (
    CircuitBreaker,
    CircuitOpenError,
    CircuitState,
)

__all__ = ["CircuitBreaker", "CircuitOpenError", "CircuitState"]
