"""Caching infrastructure for The Good Corner."""

from .cache_factory import close_search_cache, create_search_cache, get_search_cache
from .redis_cache import RedisCache
from .simple_cache import SimpleCache

__all__ = [
    "RedisCache",
    "SimpleCache",
    "close_search_cache",
    "create_search_cache",
    "get_search_cache",
]
