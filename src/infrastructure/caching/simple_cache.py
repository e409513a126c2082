"""Simple in-memory cache implementation for The Good Corner.

This module provides a TTL-based LRU cache implementing CachePort. It backs
the search cache when no Redis server is configured and stands in for Redis
in tests.
"""

import asyncio
import time
from collections import OrderedDict
from collections.abc import Callable
from datetime import datetime
from typing import Any

from src.application.ports.cache_port import CachePort

# Cache entry format: (value, expiry_time)
CacheEntry = tuple[str, float]


class SimpleCache(CachePort):
    """In-memory string cache with TTL support and LRU eviction.

    Access is serialized through an asyncio lock; expired entries are
    dropped on read and swept periodically.
    """

    def __init__(
        self,
        max_size: int = 1000,
        clock: Callable[[], float] = time.monotonic,
        cleanup_interval: float = 60.0,
    ):
        """Initialize the cache.

        Args:
            max_size: Maximum number of entries to store (default: 1000)
            clock: Monotonic time source, in seconds
            cleanup_interval: Seconds between sweeps of expired entries
        """
        self._cache: OrderedDict[str, CacheEntry] = OrderedDict()
        self._max_size = max_size
        self._clock = clock
        self._lock = asyncio.Lock()
        self._cleanup_interval = cleanup_interval
        self._last_cleanup = clock()

    async def get(self, key: str) -> str | None:
        """Get a value from the cache.

        Args:
            key: Cache key

        Returns:
            Cached value if found and not expired, None otherwise
        """
        async with self._lock:
            self._maybe_cleanup()

            entry = self._cache.get(key)
            if entry is None:
                return None

            value, expiry = entry
            if self._clock() >= expiry:
                del self._cache[key]
                return None

            self._cache.move_to_end(key)
            return value

    async def set(self, key: str, value: str, expire_seconds: int) -> None:
        """Set a value in the cache.

        Args:
            key: Cache key
            value: Value to cache
            expire_seconds: Time-to-live in seconds
        """
        expiry = self._clock() + expire_seconds

        async with self._lock:
            if key in self._cache:
                del self._cache[key]

            while len(self._cache) >= self._max_size:
                # Evict least recently used entry
                self._cache.popitem(last=False)

            self._cache[key] = (value, expiry)

    async def clear(self) -> None:
        """Clear all entries from the cache."""
        async with self._lock:
            self._cache.clear()

    async def size(self) -> int:
        """Get the number of entries in the cache."""
        async with self._lock:
            return len(self._cache)

    async def close(self) -> None:
        """Drop all entries; there is no connection to release."""
        await self.clear()

    def _maybe_cleanup(self) -> None:
        """Remove expired entries if cleanup interval has passed.

        Must be called with the lock held.
        """
        now = self._clock()
        if now - self._last_cleanup < self._cleanup_interval:
            return

        expired_keys = [
            key for key, (_, expiry) in self._cache.items() if now >= expiry
        ]
        for key in expired_keys:
            del self._cache[key]

        self._last_cleanup = now

    async def get_stats(self) -> dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary with cache stats
        """
        async with self._lock:
            size = len(self._cache)

        return {
            "backend": "memory",
            "size": size,
            "max_size": self._max_size,
            "utilization_percent": round(size / self._max_size * 100, 2)
            if self._max_size > 0
            else 0,
            "collected_at": datetime.now().isoformat(),
        }
