"""Redis-backed implementation of CachePort."""

from typing import Any

import structlog
from redis.asyncio import Redis
from redis.exceptions import RedisError

from src.application.ports.cache_port import CachePort
from src.infrastructure.resilience import CircuitBreaker, CircuitOpenError
from src.shared.config.settings import CacheSettings
from src.shared.exceptions import CacheError

logger = structlog.get_logger(__name__)


class RedisCache(CachePort):
    """Search cache stored in Redis with native key expiration.

    Every command goes through a circuit breaker; backend failures and an
    open circuit are both reported as CacheError.
    """

    def __init__(self, client: Redis, circuit_breaker: CircuitBreaker | None = None):
        """Initialize with a Redis client.

        Args:
            client: redis.asyncio client created with decode_responses=True
            circuit_breaker: Optional breaker, a default one is created if omitted
        """
        self._client = client
        self._breaker = circuit_breaker or CircuitBreaker(
            "redis_search_cache", expected_exception=RedisError
        )

    @classmethod
    def from_settings(cls, cache_settings: CacheSettings) -> "RedisCache":
        """Build a cache from application settings.

        No connection is opened here; redis-py connects on the first command.
        """
        client = Redis.from_url(
            cache_settings.redis_url,
            decode_responses=True,
            socket_timeout=cache_settings.redis_socket_timeout,
            socket_connect_timeout=cache_settings.redis_socket_timeout,
        )
        breaker = CircuitBreaker(
            "redis_search_cache",
            failure_threshold=cache_settings.cache_failure_threshold,
            recovery_timeout=cache_settings.cache_recovery_timeout,
            expected_exception=RedisError,
        )
        logger.info(
            "redis_cache_configured",
            host=cache_settings.redis_host,
            port=cache_settings.redis_port,
            db=cache_settings.redis_db,
        )
        return cls(client, breaker)

    async def get(self, key: str) -> str | None:
        try:
            return await self._breaker.call(self._client.get, key)
        except (RedisError, CircuitOpenError) as e:
            raise CacheError(f"Cache read failed: {e}") from e

    async def set(self, key: str, value: str, expire_seconds: int) -> None:
        try:
            await self._breaker.call(self._client.set, key, value, ex=expire_seconds)
        except (RedisError, CircuitOpenError) as e:
            raise CacheError(f"Cache write failed: {e}") from e

    async def close(self) -> None:
        await self._client.aclose()
        logger.info("redis_cache_closed")

    async def get_stats(self) -> dict[str, Any]:
        """Get cache statistics without touching Redis."""
        return {
            "backend": "redis",
            "circuit_state": self._breaker.get_state().value,
            "consecutive_failures": self._breaker.failure_count,
        }
