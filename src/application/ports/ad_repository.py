"""Port interface for Ad repository.

This module defines the abstract interface for persisting and retrieving
ads, following the hexagonal architecture pattern.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from src.domain.entities.ad import Ad
from src.domain.value_objects import AdSearchQuery


class AdRepositoryPort(ABC):
    """Abstract interface for Ad persistence operations.

    Implementations return fully populated ads: owner, category and tags
    are always loaded.
    """

    @abstractmethod
    async def find_by_id(self, ad_id: UUID) -> Ad | None:
        """Find an ad by its ID.

        Args:
            ad_id: The UUID of the ad

        Returns:
            Ad if found, None otherwise
        """
        pass

    @abstractmethod
    async def search_by_text(self, query: AdSearchQuery) -> list[Ad]:
        """Find ads whose title or description contains the query text.

        Matching is a case-insensitive substring match; wildcard characters
        in the text are matched literally.

        Args:
            query: Search text plus optional ordering and limit

        Returns:
            List of matching ads
        """
        pass

    @abstractmethod
    async def list_recent(
        self, category_id: int | None = None, limit: int = 20
    ) -> list[Ad]:
        """List the most recently published ads, newest first.

        Args:
            category_id: Optional category filter
            limit: Maximum number of ads to return

        Returns:
            List of ads ordered by creation date descending
        """
        pass

    @abstractmethod
    async def save(self, ad: Ad) -> Ad:
        """Insert a new ad or update an existing one.

        Owner, category and tags must already exist in the store.

        Args:
            ad: The ad to persist; ``ad.id`` is None for a new ad

        Returns:
            The persisted ad, reloaded from the store
        """
        pass

    @abstractmethod
    async def delete(self, ad_id: UUID) -> bool:
        """Delete an ad.

        Args:
            ad_id: The UUID of the ad

        Returns:
            True if an ad was deleted, False if it did not exist
        """
        pass
