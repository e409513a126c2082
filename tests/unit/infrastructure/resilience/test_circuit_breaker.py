"""Unit tests for the circuit breaker."""

from unittest.mock import AsyncMock

import asyncio

import pytest

from src.infrastructure.resilience import CircuitBreaker, CircuitOpenError, CircuitState


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def breaker(clock):
    return CircuitBreaker(
        "test",
        failure_threshold=3,
        recovery_timeout=10.0,
        expected_exception=ConnectionError,
        clock=clock,
    )


async def _fail(breaker: CircuitBreaker, times: int) -> None:
    failing = AsyncMock(side_effect=ConnectionError("down"))
    for _ in range(times):
        with pytest.raises(ConnectionError):
            await breaker.call(failing)


class TestCircuitBreaker:
    @pytest.mark.asyncio
    async def test_passes_results_through_when_closed(self, breaker):
        func = AsyncMock(return_value="ok")

        assert await breaker.call(func, "a", key="b") == "ok"
        func.assert_awaited_once_with("a", key="b")
        assert breaker.get_state() == CircuitState.CLOSED

    @pytest.mark.asyncio
    async def test_opens_after_threshold(self, breaker):
        await _fail(breaker, 3)

        assert breaker.get_state() == CircuitState.OPEN
        func = AsyncMock()
        with pytest.raises(CircuitOpenError):
            await breaker.call(func)
        func.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_success_resets_failure_count(self, breaker):
        await _fail(breaker, 2)
        await breaker.call(AsyncMock(return_value=None))
        await _fail(breaker, 2)

        assert breaker.get_state() == CircuitState.CLOSED

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_not_counted(self, breaker):
        func = AsyncMock(side_effect=ValueError("bug"))
        for _ in range(5):
            with pytest.raises(ValueError):
                await breaker.call(func)

        assert breaker.failure_count == 0

    @pytest.mark.asyncio
    async def test_half_open_trial_success_closes(self, breaker, clock):
        await _fail(breaker, 3)
        clock.now += 10.0

        assert await breaker.call(AsyncMock(return_value="back")) == "back"
        assert breaker.get_state() == CircuitState.CLOSED

    @pytest.mark.asyncio
    async def test_half_open_trial_failure_reopens(self, breaker, clock):
        await _fail(breaker, 3)
        clock.now += 10.0

        await _fail(breaker, 1)

        assert breaker.get_state() == CircuitState.OPEN
        with pytest.raises(CircuitOpenError):
            await breaker.call(AsyncMock())

    @pytest.mark.asyncio
    async def test_manual_reset(self, breaker):
        await _fail(breaker, 3)
        await breaker.reset()

        assert breaker.get_state() == CircuitState.CLOSED
        assert breaker.failure_count == 0

    @pytest.mark.asyncio
    async def test_half_open_admits_a_single_concurrent_trial(self, breaker, clock):
        await _fail(breaker, 3)
        clock.now += 10.0

        started = 0
        release = asyncio.Event()

        async def slow_backend():
            nonlocal started
            started += 1
            await release.wait()
            return "ok"

        tasks = [asyncio.create_task(breaker.call(slow_backend)) for _ in range(5)]
        for _ in range(3):
            await asyncio.sleep(0)
        release.set()
        results = await asyncio.gather(*tasks, return_exceptions=True)

        assert started == 1
        assert results.count("ok") == 1
        assert sum(isinstance(r, CircuitOpenError) for r in results) == 4
        assert breaker.get_state() == CircuitState.CLOSED

    @pytest.mark.asyncio
    async def test_unexpected_error_during_trial_frees_the_slot(self, breaker, clock):
        await _fail(breaker, 3)
        clock.now += 10.0

        with pytest.raises(ValueError):
            await breaker.call(AsyncMock(side_effect=ValueError("bug")))

        assert breaker.get_state() == CircuitState.HALF_OPEN
        assert await breaker.call(AsyncMock(return_value="back")) == "back"
        assert breaker.get_state() == CircuitState.CLOSED
