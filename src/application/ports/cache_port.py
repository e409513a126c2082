"""Port interface for the key-value cache used by ad search.

Any store with per-key get/set and a time-to-live satisfies the contract.
Values are opaque strings; serialization is the caller's concern.
"""

from abc import ABC, abstractmethod
from typing import Any


class CachePort(ABC):
    """Abstract interface for a string key-value cache with expiration."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Get a value from the cache.

        Args:
            key: Cache key

        Returns:
            The stored value, or None if absent or expired

        Raises:
            CacheError: If the backend cannot be reached
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str, expire_seconds: int) -> None:
        """Store a value under ``key`` for ``expire_seconds`` seconds.

        Args:
            key: Cache key
            value: Serialized value
            expire_seconds: Time-to-live in seconds

        Raises:
            CacheError: If the backend cannot be reached
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release any connection held by the cache."""
        pass

    @abstractmethod
    async def get_stats(self) -> dict[str, Any]:
        """Describe the backend and its state for the metrics endpoint."""
        pass
