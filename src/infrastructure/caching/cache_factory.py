"""Process-wide search cache handle.

The cache client is created lazily on first use and shared by every
request; FastAPI dependencies and the CLI pass it explicitly into the
search use case.
"""

import structlog

from src.application.ports.cache_port import CachePort
from src.shared.config.settings import CacheSettings, get_settings

from .redis_cache import RedisCache
from .simple_cache import SimpleCache

logger = structlog.get_logger(__name__)

_search_cache: CachePort | None = None
_initialized = False


def create_search_cache(cache_settings: CacheSettings) -> CachePort | None:
    """Create the cache backend selected by configuration.

    Args:
        cache_settings: Cache section of the application settings

    Returns:
        A CachePort, or None when caching is disabled
    """
    if cache_settings.cache_backend == "redis":
        return RedisCache.from_settings(cache_settings)
    if cache_settings.cache_backend == "memory":
        logger.info(
            "memory_cache_configured", max_size=cache_settings.memory_cache_max_size
        )
        return SimpleCache(max_size=cache_settings.memory_cache_max_size)

    logger.info("search_cache_disabled")
    return None


def get_search_cache() -> CachePort | None:
    """Get the global search cache instance, creating it on first call."""
    global _search_cache, _initialized

    if not _initialized:
        _search_cache = create_search_cache(get_settings().cache)
        _initialized = True
    return _search_cache


async def close_search_cache() -> None:
    """Close the global search cache so the next call recreates it."""
    global _search_cache, _initialized

    if _search_cache is not None:
        await _search_cache.close()
    _search_cache = None
    _initialized = False
