"""Unit tests for the in-memory TTL cache."""

import pytest

from src.infrastructure.caching import SimpleCache


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


class TestSimpleCache:
    @pytest.mark.asyncio
    async def test_get_missing_key(self):
        assert await SimpleCache().get("nothing") is None

    @pytest.mark.asyncio
    async def test_entry_expires_after_ttl(self, clock):
        cache = SimpleCache(clock=clock)
        await cache.set("red", "[]", expire_seconds=600)

        clock.now = 599.9
        assert await cache.get("red") == "[]"

        clock.now = 600.0
        assert await cache.get("red") is None
        assert await cache.size() == 0

    @pytest.mark.asyncio
    async def test_overwrite_resets_expiry(self, clock):
        cache = SimpleCache(clock=clock)
        await cache.set("red", "old", expire_seconds=10)
        clock.now = 8
        await cache.set("red", "new", expire_seconds=10)
        clock.now = 15

        assert await cache.get("red") == "new"

    @pytest.mark.asyncio
    async def test_least_recently_used_entry_is_evicted(self):
        cache = SimpleCache(max_size=2)
        await cache.set("a", "1", expire_seconds=60)
        await cache.set("b", "2", expire_seconds=60)
        await cache.get("a")
        await cache.set("c", "3", expire_seconds=60)

        assert await cache.get("a") == "1"
        assert await cache.get("b") is None
        assert await cache.get("c") == "3"

    @pytest.mark.asyncio
    async def test_periodic_cleanup_drops_expired_entries(self, clock):
        cache = SimpleCache(clock=clock, cleanup_interval=60)
        await cache.set("short", "x", expire_seconds=5)
        await cache.set("long", "y", expire_seconds=600)

        clock.now = 61
        await cache.get("long")

        assert await cache.size() == 1

    @pytest.mark.asyncio
    async def test_clear(self):
        cache = SimpleCache()
        await cache.set("a", "1", expire_seconds=60)
        await cache.set("b", "2", expire_seconds=60)

        await cache.clear()
        assert await cache.size() == 0

    @pytest.mark.asyncio
    async def test_stats(self):
        cache = SimpleCache(max_size=4)
        await cache.set("a", "1", expire_seconds=60)

        stats = await cache.get_stats()

        assert stats["backend"] == "memory"
        assert stats["size"] == 1
        assert stats["max_size"] == 4
        assert stats["utilization_percent"] == 25.0
