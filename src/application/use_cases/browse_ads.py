"""Read-only ad lookups: single ad by ID and the recent-ads listing."""

from uuid import UUID

from src.application.ports import AdRepositoryPort
from src.domain.entities import Ad
from src.shared.exceptions import AdNotFoundError

DEFAULT_AD_LIST_LIMIT = 20


class GetAdUseCase:
    """Use case for fetching one ad."""

    def __init__(self, ad_repository: AdRepositoryPort):
        self._ad_repository = ad_repository

    async def execute(self, ad_id: UUID) -> Ad:
        """Return the ad or raise AdNotFoundError."""
        ad = await self._ad_repository.find_by_id(ad_id)
        if ad is None:
            raise AdNotFoundError(ad_id)
        return ad


class ListAdsUseCase:
    """Use case for the home page listing: newest ads first, capped."""

    def __init__(
        self, ad_repository: AdRepositoryPort, limit: int = DEFAULT_AD_LIST_LIMIT
    ):
        self._ad_repository = ad_repository
        self._limit = limit

    async def execute(self, category_id: int | None = None) -> list[Ad]:
        """List recent ads, optionally restricted to one category."""
        return await self._ad_repository.list_recent(
            category_id=category_id, limit=self._limit
        )
