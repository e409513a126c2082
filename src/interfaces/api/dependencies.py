"""Dependency injection for FastAPI application.

This module provides dependency functions that can be injected
into FastAPI route handlers. Each request gets its own database session;
the search cache client is shared by the whole process.
"""

from collections.abc import AsyncGenerator

import structlog
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.ports import (
    AdRepositoryPort,
    CachePort,
    CategoryRepositoryPort,
    TagRepositoryPort,
    UserRepositoryPort,
)
from src.application.use_cases import (
    CreateAdUseCase,
    DeleteAdUseCase,
    GetAdUseCase,
    ListAdsUseCase,
    SearchAdsUseCase,
    UpdateAdUseCase,
)
from src.domain.value_objects import SearchOrder
from src.infrastructure.caching import close_search_cache, get_search_cache
from src.infrastructure.persistence.postgres import (
    PostgresAdRepository,
    PostgresCategoryRepository,
    PostgresTagRepository,
    PostgresUserRepository,
    close_db_connection,
    get_db_connection,
)
from src.shared.config.settings import get_settings

logger = structlog.get_logger(__name__)


async def get_db_session() -> AsyncGenerator[AsyncSession]:
    """Get a database session scoped to the request.

    The session commits after the route returns and rolls back if it raises.

    Yields:
        AsyncSession instance
    """
    connection = await get_db_connection()
    async with connection.get_session() as session:
        yield session


def get_cache() -> CachePort | None:
    """Get the shared search cache, or None when caching is disabled."""
    return get_search_cache()


def get_ad_repository(
    session: AsyncSession = Depends(get_db_session),  # noqa: B008
) -> AdRepositoryPort:
    return PostgresAdRepository(session)


def get_category_repository(
    session: AsyncSession = Depends(get_db_session),  # noqa: B008
) -> CategoryRepositoryPort:
    return PostgresCategoryRepository(session)


def get_tag_repository(
    session: AsyncSession = Depends(get_db_session),  # noqa: B008
) -> TagRepositoryPort:
    return PostgresTagRepository(session)


def get_user_repository(
    session: AsyncSession = Depends(get_db_session),  # noqa: B008
) -> UserRepositoryPort:
    return PostgresUserRepository(session)


def get_search_ads_use_case(
    ad_repository: AdRepositoryPort = Depends(get_ad_repository),  # noqa: B008
    cache: CachePort | None = Depends(get_cache),  # noqa: B008
) -> SearchAdsUseCase:
    """Get the search ads use case.

    Args:
        ad_repository: Injected ad repository
        cache: Injected shared search cache

    Returns:
        SearchAdsUseCase instance configured from settings
    """
    settings = get_settings()
    return SearchAdsUseCase(
        ad_repository=ad_repository,
        cache=cache,
        ttl_seconds=settings.cache.search_cache_ttl_seconds,
        result_limit=settings.search.search_result_limit,
        order=SearchOrder(settings.search.search_order),
    )


def get_list_ads_use_case(
    ad_repository: AdRepositoryPort = Depends(get_ad_repository),  # noqa: B008
) -> ListAdsUseCase:
    return ListAdsUseCase(ad_repository, limit=get_settings().search.ad_list_limit)


def get_get_ad_use_case(
    ad_repository: AdRepositoryPort = Depends(get_ad_repository),  # noqa: B008
) -> GetAdUseCase:
    return GetAdUseCase(ad_repository)


def get_create_ad_use_case(
    ad_repository: AdRepositoryPort = Depends(get_ad_repository),  # noqa: B008
    category_repository: CategoryRepositoryPort = Depends(  # noqa: B008
        get_category_repository
    ),
    tag_repository: TagRepositoryPort = Depends(get_tag_repository),  # noqa: B008
    user_repository: UserRepositoryPort = Depends(get_user_repository),  # noqa: B008
) -> CreateAdUseCase:
    return CreateAdUseCase(
        ad_repository=ad_repository,
        category_repository=category_repository,
        tag_repository=tag_repository,
        user_repository=user_repository,
    )


def get_update_ad_use_case(
    ad_repository: AdRepositoryPort = Depends(get_ad_repository),  # noqa: B008
    category_repository: CategoryRepositoryPort = Depends(  # noqa: B008
        get_category_repository
    ),
    tag_repository: TagRepositoryPort = Depends(get_tag_repository),  # noqa: B008
) -> UpdateAdUseCase:
    return UpdateAdUseCase(
        ad_repository=ad_repository,
        category_repository=category_repository,
        tag_repository=tag_repository,
    )


def get_delete_ad_use_case(
    ad_repository: AdRepositoryPort = Depends(get_ad_repository),  # noqa: B008
) -> DeleteAdUseCase:
    return DeleteAdUseCase(ad_repository)


async def shutdown_dependencies():
    """Cleanup function to close connections on shutdown."""
    try:
        await close_search_cache()
        logger.info("Closed search cache")
    except Exception as e:
        logger.error(f"Error closing search cache: {e}")

    await close_db_connection()
    logger.info("Closed database connections")
