"""Port interfaces for category and tag repositories."""

from abc import ABC, abstractmethod

from src.domain.entities.catalog import Category, Tag


class CategoryRepositoryPort(ABC):
    """Abstract interface for Category persistence operations."""

    @abstractmethod
    async def find_by_id(self, category_id: int) -> Category | None:
        """Find a category by ID, returning None when it does not exist."""
        pass

    @abstractmethod
    async def find_all(self) -> list[Category]:
        """Return every category ordered by name."""
        pass

    @abstractmethod
    async def save(self, category: Category) -> Category:
        """Persist a category and return it with its generated ID."""
        pass


class TagRepositoryPort(ABC):
    """Abstract interface for Tag persistence operations."""

    @abstractmethod
    async def find_by_id(self, tag_id: int) -> Tag | None:
        """Find a tag by ID, returning None when it does not exist."""
        pass

    @abstractmethod
    async def find_all(self) -> list[Tag]:
        """Return every tag ordered by name."""
        pass

    @abstractmethod
    async def save(self, tag: Tag) -> Tag:
        """Persist a tag and return it with its generated ID."""
        pass
