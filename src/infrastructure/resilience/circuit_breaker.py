"""Circuit breaker for the search cache backend.

When the cache backend keeps failing, the breaker opens and calls are
rejected immediately for a recovery window instead of each one waiting for
a socket timeout. After the window a single trial call is let through.
"""

import asyncio
import time
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class CircuitState(Enum):
    """States of the circuit breaker."""

    CLOSED = "closed"  # Normal operation
    OPEN = "open"  # Failing, reject requests
    HALF_OPEN = "half_open"  # Testing if service recovered


class CircuitOpenError(Exception):
    """Raised when circuit breaker is open and rejecting requests."""

    pass


class CircuitBreaker:
    """Simple circuit breaker for async operations.

    The circuit breaker has three states:
    - CLOSED: Normal operation, requests pass through
    - OPEN: Too many consecutive failures, requests are rejected immediately
    - HALF_OPEN: One trial request decides between CLOSED and OPEN
    """

    def __init__(
        self,
        name: str,
        failure_threshold: int = 5,
        recovery_timeout: float = 30.0,
        expected_exception: type[Exception] | tuple[type[Exception], ...] = Exception,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the circuit breaker.

        Args:
            name: Name used in log events
            failure_threshold: Consecutive failures before opening the circuit
            recovery_timeout: Seconds to wait before trying half-open
            expected_exception: Exception type(s) counted as failures
            clock: Monotonic time source
        """
        self.name = name
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.expected_exception = expected_exception
        self._clock = clock

        self.failure_count = 0
        self.last_failure_time: float | None = None
        self.state = CircuitState.CLOSED
        self._trial_in_flight = False
        self._lock = asyncio.Lock()

    async def call(
        self, func: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any
    ) -> T:
        """Execute an async function through the circuit breaker.

        Args:
            func: Async function to execute
            *args: Positional arguments for func
            **kwargs: Keyword arguments for func

        Returns:
            Result of func

        Raises:
            CircuitOpenError: If circuit is open
            Exception: Any exception from func
        """
        async with self._lock:
            if self.state == CircuitState.OPEN:
                if self._should_attempt_reset():
                    self.state = CircuitState.HALF_OPEN
                    self._trial_in_flight = True
                    logger.info("circuit_half_open", circuit=self.name)
                else:
                    raise CircuitOpenError(f"Circuit '{self.name}' is OPEN")
            elif self.state == CircuitState.HALF_OPEN:
                # Only one trial call at a time while half-open
                if self._trial_in_flight:
                    raise CircuitOpenError(
                        f"Circuit '{self.name}' is HALF_OPEN, trial in progress"
                    )
                self._trial_in_flight = True

        try:
            result = await func(*args, **kwargs)
        except self.expected_exception:
            await self._on_failure()
            raise
        except BaseException:
            # Not a backend failure, the next call may run the trial again
            self._trial_in_flight = False
            raise

        await self._on_success()
        return result

    async def _on_success(self) -> None:
        """Handle successful call."""
        async with self._lock:
            self._trial_in_flight = False
            self.failure_count = 0
            if self.state == CircuitState.HALF_OPEN:
                self.state = CircuitState.CLOSED
                logger.info("circuit_closed", circuit=self.name)

    async def _on_failure(self) -> None:
        """Handle failed call."""
        async with self._lock:
            self._trial_in_flight = False
            self.failure_count += 1
            self.last_failure_time = self._clock()

            if (
                self.state == CircuitState.HALF_OPEN
                or self.failure_count >= self.failure_threshold
            ):
                self.state = CircuitState.OPEN
                logger.warning(
                    "circuit_opened",
                    circuit=self.name,
                    failure_count=self.failure_count,
                    recovery_timeout=self.recovery_timeout,
                )

    def _should_attempt_reset(self) -> bool:
        """Check if we should try to reset from OPEN state."""
        return (
            self.last_failure_time is not None
            and self._clock() - self.last_failure_time >= self.recovery_timeout
        )

    def get_state(self) -> CircuitState:
        """Get current circuit state."""
        return self.state

    async def reset(self) -> None:
        """Manually reset the circuit breaker."""
        async with self._lock:
            self.failure_count = 0
            self.last_failure_time = None
            self.state = CircuitState.CLOSED
            self._trial_in_flight = False
