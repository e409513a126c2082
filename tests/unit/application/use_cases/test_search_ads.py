"""Unit tests for the cache-aside ad search use case."""

import json
from unittest.mock import AsyncMock

import pytest

from src.application.use_cases import SearchAdsUseCase
from src.domain.value_objects import AdSearchQuery, SearchOrder
from src.infrastructure.caching import SimpleCache
from src.infrastructure.monitoring import get_metrics, reset_metrics
from src.shared.exceptions import CacheError, SearchServiceError
from tests.fixtures import make_ad


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def fresh_metrics():
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture
def mock_ad_repository():
    """Create a mock ad repository."""
    return AsyncMock()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return SimpleCache(clock=clock)


@pytest.fixture
def sample_ads():
    return [
        make_ad(title="Red bike", description="City bike"),
        make_ad(title="Blue car", description="Small red car"),
    ]


class TestSearchAdsCacheAside:
    """Read path through the cache."""

    @pytest.mark.asyncio
    async def test_miss_queries_store_and_populates_cache(
        self, mock_ad_repository, cache, sample_ads
    ):
        mock_ad_repository.search_by_text.return_value = sample_ads
        use_case = SearchAdsUseCase(ad_repository=mock_ad_repository, cache=cache)

        results = await use_case.execute("red")

        assert results == sample_ads
        mock_ad_repository.search_by_text.assert_awaited_once_with(
            AdSearchQuery(text="red")
        )
        cached = json.loads(await cache.get("red"))
        assert [entry["title"] for entry in cached] == ["Red bike", "Blue car"]

    @pytest.mark.asyncio
    async def test_hit_does_not_query_store(
        self, mock_ad_repository, cache, sample_ads
    ):
        mock_ad_repository.search_by_text.return_value = sample_ads
        use_case = SearchAdsUseCase(ad_repository=mock_ad_repository, cache=cache)

        first = await use_case.execute("red")
        second = await use_case.execute("red")

        assert second == first
        assert mock_ad_repository.search_by_text.await_count == 1

    @pytest.mark.asyncio
    async def test_cached_result_survives_store_changes_until_expiry(
        self, mock_ad_repository, cache, clock, sample_ads
    ):
        """Writes do not invalidate; the old result is served for the whole TTL."""
        mock_ad_repository.search_by_text.return_value = sample_ads[:1]
        use_case = SearchAdsUseCase(ad_repository=mock_ad_repository, cache=cache)
        await use_case.execute("red")

        mock_ad_repository.search_by_text.return_value = sample_ads
        clock.advance(599)
        assert await use_case.execute("red") == sample_ads[:1]

        clock.advance(1)
        assert await use_case.execute("red") == sample_ads
        assert mock_ad_repository.search_by_text.await_count == 2

    @pytest.mark.asyncio
    async def test_red_query_keeps_store_order_and_caches_for_ten_minutes(
        self, mock_ad_repository, cache, clock
    ):
        red_bike = make_ad(title="Red Bike", description="")
        red_scooter = make_ad(title="red scooter", description="")
        mock_ad_repository.search_by_text.return_value = [red_bike, red_scooter]
        use_case = SearchAdsUseCase(ad_repository=mock_ad_repository, cache=cache)

        results = await use_case.execute("red")

        assert [ad.title for ad in results] == ["Red Bike", "red scooter"]
        clock.advance(599)
        assert await cache.get("red") is not None
        clock.advance(1)
        assert await cache.get("red") is None

    @pytest.mark.asyncio
    async def test_custom_ttl_is_used_for_cache_write(
        self, mock_ad_repository, sample_ads
    ):
        mock_cache = AsyncMock()
        mock_cache.get.return_value = None
        mock_ad_repository.search_by_text.return_value = sample_ads
        use_case = SearchAdsUseCase(
            ad_repository=mock_ad_repository, cache=mock_cache, ttl_seconds=30
        )

        await use_case.execute("bike")

        mock_cache.set.assert_awaited_once()
        key, payload = mock_cache.set.await_args.args
        assert key == "bike"
        assert mock_cache.set.await_args.kwargs == {"expire_seconds": 30}
        assert len(json.loads(payload)) == 2

    @pytest.mark.asyncio
    async def test_queries_are_cached_verbatim(self, mock_ad_repository, cache):
        """Different spellings of the same text are different cache keys."""
        mock_ad_repository.search_by_text.return_value = []
        use_case = SearchAdsUseCase(ad_repository=mock_ad_repository, cache=cache)

        await use_case.execute("red")
        await use_case.execute("RED")
        await use_case.execute(" red")

        assert mock_ad_repository.search_by_text.await_count == 3
        assert await cache.size() == 3

    @pytest.mark.asyncio
    async def test_empty_result_is_cached(self, mock_ad_repository, cache):
        mock_ad_repository.search_by_text.return_value = []
        use_case = SearchAdsUseCase(ad_repository=mock_ad_repository, cache=cache)

        assert await use_case.execute("zzz") == []
        assert await use_case.execute("zzz") == []
        assert mock_ad_repository.search_by_text.await_count == 1

    @pytest.mark.asyncio
    async def test_empty_query_is_passed_through(
        self, mock_ad_repository, cache, sample_ads
    ):
        mock_ad_repository.search_by_text.return_value = sample_ads
        use_case = SearchAdsUseCase(ad_repository=mock_ad_repository, cache=cache)

        results = await use_case.execute("")

        assert results == sample_ads
        mock_ad_repository.search_by_text.assert_awaited_once_with(
            AdSearchQuery(text="")
        )
        assert await cache.get("") is not None

    @pytest.mark.asyncio
    async def test_limit_and_order_are_forwarded(self, mock_ad_repository):
        mock_ad_repository.search_by_text.return_value = []
        use_case = SearchAdsUseCase(
            ad_repository=mock_ad_repository,
            result_limit=5,
            order=SearchOrder.NEWEST_FIRST,
        )

        await use_case.execute("bike")

        mock_ad_repository.search_by_text.assert_awaited_once_with(
            AdSearchQuery(text="bike", limit=5, order=SearchOrder.NEWEST_FIRST)
        )


class TestSearchAdsDegradation:
    """Cache problems never reach the caller."""

    @pytest.mark.asyncio
    async def test_without_cache_every_call_hits_store(
        self, mock_ad_repository, sample_ads
    ):
        mock_ad_repository.search_by_text.return_value = sample_ads
        use_case = SearchAdsUseCase(ad_repository=mock_ad_repository)

        await use_case.execute("red")
        await use_case.execute("red")

        assert mock_ad_repository.search_by_text.await_count == 2
        assert get_metrics().cache_misses == 0

    @pytest.mark.asyncio
    async def test_cache_read_failure_falls_back_to_store(
        self, mock_ad_repository, sample_ads
    ):
        mock_cache = AsyncMock()
        mock_cache.get.side_effect = CacheError("connection refused")
        mock_ad_repository.search_by_text.return_value = sample_ads
        use_case = SearchAdsUseCase(ad_repository=mock_ad_repository, cache=mock_cache)

        results = await use_case.execute("red")

        assert results == sample_ads
        mock_cache.set.assert_awaited_once()
        assert get_metrics().cache_errors == 1

    @pytest.mark.asyncio
    async def test_cache_write_failure_still_returns_results(
        self, mock_ad_repository, sample_ads
    ):
        mock_cache = AsyncMock()
        mock_cache.get.return_value = None
        mock_cache.set.side_effect = CacheError("read-only replica")
        mock_ad_repository.search_by_text.return_value = sample_ads
        use_case = SearchAdsUseCase(ad_repository=mock_ad_repository, cache=mock_cache)

        assert await use_case.execute("red") == sample_ads
        assert get_metrics().cache_errors == 1

    @pytest.mark.asyncio
    async def test_corrupted_entry_is_treated_as_miss_and_overwritten(
        self, mock_ad_repository, cache, sample_ads
    ):
        await cache.set("red", "{not json", expire_seconds=600)
        mock_ad_repository.search_by_text.return_value = sample_ads
        use_case = SearchAdsUseCase(ad_repository=mock_ad_repository, cache=cache)

        results = await use_case.execute("red")

        assert results == sample_ads
        mock_ad_repository.search_by_text.assert_awaited_once()
        assert len(json.loads(await cache.get("red"))) == 2

    @pytest.mark.asyncio
    async def test_store_failure_raises_search_service_error(
        self, mock_ad_repository, cache
    ):
        mock_ad_repository.search_by_text.side_effect = RuntimeError("db down")
        use_case = SearchAdsUseCase(ad_repository=mock_ad_repository, cache=cache)

        with pytest.raises(SearchServiceError) as exc_info:
            await use_case.execute("red")

        assert exc_info.value.error_code == "SEARCH_SERVICE_ERROR"
        assert "db down" in exc_info.value.message
        assert await cache.size() == 0
        assert get_metrics().failed_queries == 1


class TestSearchAdsMetrics:
    @pytest.mark.asyncio
    async def test_hits_and_misses_are_counted(
        self, mock_ad_repository, cache, sample_ads
    ):
        mock_ad_repository.search_by_text.return_value = sample_ads
        use_case = SearchAdsUseCase(ad_repository=mock_ad_repository, cache=cache)

        await use_case.execute("red")
        await use_case.execute("red")
        await use_case.execute("bike")

        metrics = get_metrics()
        assert metrics.cache_hits == 1
        assert metrics.cache_misses == 2
        assert metrics.total_queries == 2
