"""Search ads use case.

Substring search over ad titles and descriptions with a cache-aside read
path: the cache is probed first with the raw query string as key, and on a
miss the store result is serialized and cached with a fixed expiration.
The cache is an optimization only. Any cache failure degrades to a plain
store query and is never reported to the caller.
"""

import structlog
from pydantic import TypeAdapter, ValidationError

from src.application.ports import AdRepositoryPort, CachePort
from src.domain.entities import Ad
from src.domain.value_objects import AdSearchQuery, SearchOrder
from src.infrastructure.monitoring import (
    add_span_attributes,
    track_cache_error,
    track_cache_hit,
    track_cache_miss,
    track_query_performance,
    trace_span,
)
from src.shared.exceptions import SearchServiceError

logger = structlog.get_logger(__name__)

DEFAULT_SEARCH_CACHE_TTL_SECONDS = 600

_ad_list_adapter = TypeAdapter(list[Ad])


class SearchAdsUseCase:
    """Use case for searching ads by text.

    Concurrent misses for the same query each hit the store and each write
    the cache; the last write wins. Writes to ads do not invalidate cached
    results, so a search may be stale for up to ``ttl_seconds``.
    """

    def __init__(
        self,
        ad_repository: AdRepositoryPort,
        cache: CachePort | None = None,
        ttl_seconds: int = DEFAULT_SEARCH_CACHE_TTL_SECONDS,
        result_limit: int | None = None,
        order: SearchOrder = SearchOrder.STORE,
    ):
        """Initialize the use case with required dependencies.

        Args:
            ad_repository: Port interface for ad persistence
            cache: Optional cache; None disables caching entirely
            ttl_seconds: Expiration of cached search results
            result_limit: Optional cap on the number of ads returned
            order: Ordering applied by the store query
        """
        self._ad_repository = ad_repository
        self._cache = cache
        self._ttl_seconds = ttl_seconds
        self._result_limit = result_limit
        self._order = order

    async def execute(self, query: str) -> list[Ad]:
        """Execute the search.

        Args:
            query: Raw search string, used verbatim as the cache key

        Returns:
            Matching ads, from the cache or fresh from the store

        Raises:
            SearchServiceError: If the store query fails
        """
        with trace_span("usecase.search_ads", {"search.query_length": len(query)}):
            cached = await self._read_cache(query)
            if cached is not None:
                track_cache_hit()
                add_span_attributes({"search.cache_hit": True})
                logger.info("search_cache_hit", query=query, results=len(cached))
                return cached

            if self._cache is not None:
                track_cache_miss()
            add_span_attributes({"search.cache_hit": False})

            ads = await self._query_store(query)
            await self._write_cache(query, ads)

            logger.info("search_completed", query=query, results=len(ads))
            return ads

    async def _read_cache(self, query: str) -> list[Ad] | None:
        """Return the cached result for ``query``, or None on any kind of miss."""
        if self._cache is None:
            return None

        try:
            raw = await self._cache.get(query)
        except Exception as e:
            track_cache_error()
            logger.warning("search_cache_read_failed", query=query, error=str(e))
            return None

        if raw is None:
            return None

        try:
            return _ad_list_adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(
                "search_cache_entry_corrupted",
                query=query,
                error_count=e.error_count(),
            )
            return None

    async def _query_store(self, query: str) -> list[Ad]:
        search_query = AdSearchQuery(
            text=query, limit=self._result_limit, order=self._order
        )
        try:
            async with track_query_performance("search_ads", target=query):
                return await self._ad_repository.search_by_text(search_query)
        except Exception as e:
            logger.error("search_store_query_failed", query=query, error=str(e))
            raise SearchServiceError("search_ads", str(e)) from e

    async def _write_cache(self, query: str, ads: list[Ad]) -> None:
        if self._cache is None:
            return

        payload = _ad_list_adapter.dump_json(ads).decode("utf-8")
        try:
            await self._cache.set(query, payload, expire_seconds=self._ttl_seconds)
        except Exception as e:
            track_cache_error()
            logger.warning("search_cache_write_failed", query=query, error=str(e))
