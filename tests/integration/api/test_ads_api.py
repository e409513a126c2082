"""Integration tests for the HTTP API.

Requests go through the real routers, use cases and SQLAlchemy
repositories against an in-memory SQLite database, with the in-memory
cache standing in for Redis.
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.application.use_cases import SearchAdsUseCase
from src.infrastructure.caching import SimpleCache
from src.infrastructure.monitoring import reset_metrics
from src.infrastructure.persistence.postgres.models import Base
from src.interfaces.api.dependencies import (
    get_cache,
    get_db_session,
    get_search_ads_use_case,
)
from src.interfaces.api.main import app


@pytest_asyncio.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def cache():
    return SimpleCache()


@pytest_asyncio.fixture
async def client(session_factory, cache):
    """HTTP client wired to the test database and cache."""

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_cache] = lambda: cache
    reset_metrics()

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as http_client:
        yield http_client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def seeded(client):
    """Create an owner, two categories and two tags through the API."""
    owner = (await client.post("/api/v1/users", json={"email": "seller@example.com"})).json()
    others = (await client.post("/api/v1/categories", json={"name": "Autres"})).json()
    cars = (await client.post("/api/v1/categories", json={"name": "Voitures"})).json()
    used = (await client.post("/api/v1/tags", json={"name": "Occasion"})).json()
    urgent = (await client.post("/api/v1/tags", json={"name": "Urgent"})).json()
    return {"owner": owner, "others": others, "cars": cars, "used": used, "urgent": urgent}


async def publish(client, seeded, title, description="", category="others", tags=()):
    response = await client.post(
        "/api/v1/ads",
        json={
            "owner_id": seeded["owner"]["id"],
            "title": title,
            "description": description,
            "price": 120.0,
            "category_id": seeded[category]["id"],
            "tag_ids": [seeded[tag]["id"] for tag in tags],
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestAdLifecycle:
    @pytest.mark.asyncio
    async def test_create_get_update_delete(self, client, seeded):
        ad = await publish(
            client, seeded, "Red bike", "City bike", tags=("used", "urgent")
        )
        assert ad["owner"]["email"] == "seller@example.com"
        assert ad["category"]["name"] == "Autres"
        assert [tag["name"] for tag in ad["tags"]] == ["Occasion", "Urgent"]

        fetched = await client.get(f"/api/v1/ads/{ad['id']}")
        assert fetched.status_code == 200
        assert fetched.json() == ad

        patched = await client.patch(
            f"/api/v1/ads/{ad['id']}",
            json={
                "price": 80.0,
                "category_id": seeded["cars"]["id"],
                "tag_ids": [seeded["urgent"]["id"]],
            },
        )
        assert patched.status_code == 200
        assert patched.json()["price"] == 80.0
        assert patched.json()["category"]["name"] == "Voitures"
        assert patched.json()["title"] == "Red bike"
        assert [tag["name"] for tag in patched.json()["tags"]] == ["Urgent"]

        deleted = await client.delete(f"/api/v1/ads/{ad['id']}")
        assert deleted.status_code == 200
        assert deleted.json()["price"] == 80.0

        missing = await client.get(f"/api/v1/ads/{ad['id']}")
        assert missing.status_code == 404
        assert missing.json()["error"]["code"] == "AD_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_unknown_category_creates_nothing(self, client, seeded):
        response = await client.post(
            "/api/v1/ads",
            json={
                "owner_id": seeded["owner"]["id"],
                "title": "Ghost",
                "price": 1.0,
                "category_id": 999,
            },
        )

        assert response.status_code == 404
        error = response.json()["error"]
        assert error["code"] == "CATEGORY_NOT_FOUND"
        assert error["message"] == "Category with ID 999 does not exist."
        assert "request_id" in error
        assert (await client.get("/api/v1/ads")).json() == []

    @pytest.mark.asyncio
    async def test_unknown_tag_and_owner(self, client, seeded):
        bad_tag = await client.post(
            "/api/v1/ads",
            json={
                "owner_id": seeded["owner"]["id"],
                "title": "Ghost",
                "price": 1.0,
                "category_id": seeded["others"]["id"],
                "tag_ids": [999],
            },
        )
        bad_owner = await client.post(
            "/api/v1/ads",
            json={
                "owner_id": str(uuid4()),
                "title": "Ghost",
                "price": 1.0,
                "category_id": seeded["others"]["id"],
            },
        )

        assert bad_tag.json()["error"]["code"] == "TAG_NOT_FOUND"
        assert bad_owner.json()["error"]["code"] == "USER_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_invalid_payload(self, client, seeded):
        response = await client.post(
            "/api/v1/ads",
            json={"owner_id": seeded["owner"]["id"], "title": "", "price": -5},
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_list_filters_by_category(self, client, seeded):
        await publish(client, seeded, "Red bike")
        await publish(client, seeded, "Blue car", category="cars")

        response = await client.get(
            "/api/v1/ads", params={"category_id": seeded["cars"]["id"]}
        )

        assert [ad["title"] for ad in response.json()] == ["Blue car"]


class TestAdSearch:
    @pytest.mark.asyncio
    async def test_search_matches_title_and_description(self, client, seeded):
        await publish(client, seeded, "Red bike", "City bike")
        await publish(client, seeded, "Blue car", "Small red car", category="cars")
        await publish(client, seeded, "Sofa", "Three seats")

        response = await client.get("/api/v1/ads/search", params={"query": "red"})

        assert response.status_code == 200
        assert sorted(ad["title"] for ad in response.json()) == ["Blue car", "Red bike"]

    @pytest.mark.asyncio
    async def test_missing_query_matches_everything(self, client, seeded):
        await publish(client, seeded, "Red bike")
        await publish(client, seeded, "Sofa")

        response = await client.get("/api/v1/ads/search")

        assert len(response.json()) == 2

    @pytest.mark.asyncio
    async def test_cached_results_are_stale_until_expiry(self, client, seeded, cache):
        await publish(client, seeded, "Red bike")
        first = await client.get("/api/v1/ads/search", params={"query": "red"})

        await publish(client, seeded, "Red scooter")
        second = await client.get("/api/v1/ads/search", params={"query": "red"})
        other_key = await client.get("/api/v1/ads/search", params={"query": "Red"})

        assert second.json() == first.json()
        assert len(other_key.json()) == 2
        assert await cache.size() == 2

    @pytest.mark.asyncio
    async def test_store_failure_is_503(self, client):
        repository = AsyncMock()
        repository.search_by_text.side_effect = RuntimeError("connection lost")
        app.dependency_overrides[get_search_ads_use_case] = lambda: SearchAdsUseCase(
            ad_repository=repository
        )

        response = await client.get("/api/v1/ads/search", params={"query": "red"})

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "SEARCH_SERVICE_ERROR"


class TestCatalogAndUsersApi:
    @pytest.mark.asyncio
    async def test_catalog_listing(self, client, seeded):
        categories = (await client.get("/api/v1/categories")).json()
        tags = (await client.get("/api/v1/tags")).json()

        assert [c["name"] for c in categories] == ["Autres", "Voitures"]
        assert [t["name"] for t in tags] == ["Occasion", "Urgent"]

    @pytest.mark.asyncio
    async def test_missing_category_and_tag(self, client):
        assert (await client.get("/api/v1/categories/42")).status_code == 404
        assert (await client.get("/api/v1/tags/42")).status_code == 404

    @pytest.mark.asyncio
    async def test_duplicate_user_is_409(self, client, seeded):
        response = await client.post(
            "/api/v1/users", json={"email": "Seller@Example.com"}
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "DUPLICATE_ENTITY"

    @pytest.mark.asyncio
    async def test_get_user(self, client, seeded):
        response = await client.get(f"/api/v1/users/{seeded['owner']['id']}")

        assert response.json()["email"] == "seller@example.com"


class TestOperationalEndpoints:
    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    @pytest.mark.asyncio
    async def test_metrics_report_cache_activity(self, client, seeded):
        await publish(client, seeded, "Red bike")
        await client.get("/api/v1/ads/search", params={"query": "red"})
        await client.get("/api/v1/ads/search", params={"query": "red"})

        body = (await client.get("/api/v1/metrics/performance")).json()

        assert body["cache_hits"] == 1
        assert body["cache_misses"] == 1
        assert body["total_queries"] == 1
        assert body["cache"]["backend"] == "memory"
