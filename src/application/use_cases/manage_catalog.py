"""Category and tag use cases."""

import structlog

from src.application.ports import CategoryRepositoryPort, TagRepositoryPort
from src.domain.entities import Category, Tag
from src.shared.exceptions import CategoryNotFoundError, TagNotFoundError

logger = structlog.get_logger(__name__)


class CreateCategoryUseCase:
    """Use case for adding a category."""

    def __init__(self, category_repository: CategoryRepositoryPort):
        self._category_repository = category_repository

    async def execute(self, name: str) -> Category:
        category = await self._category_repository.save(Category(name=name))
        logger.info("category_created", category_id=category.id)
        return category


class GetCategoryUseCase:
    """Use case for fetching one category."""

    def __init__(self, category_repository: CategoryRepositoryPort):
        self._category_repository = category_repository

    async def execute(self, category_id: int) -> Category:
        """Return the category or raise CategoryNotFoundError."""
        category = await self._category_repository.find_by_id(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        return category


class ListCategoriesUseCase:
    """Use case for listing all categories by name."""

    def __init__(self, category_repository: CategoryRepositoryPort):
        self._category_repository = category_repository

    async def execute(self) -> list[Category]:
        return await self._category_repository.find_all()


class CreateTagUseCase:
    """Use case for adding a tag."""

    def __init__(self, tag_repository: TagRepositoryPort):
        self._tag_repository = tag_repository

    async def execute(self, name: str) -> Tag:
        tag = await self._tag_repository.save(Tag(name=name))
        logger.info("tag_created", tag_id=tag.id)
        return tag


class GetTagUseCase:
    """Use case for fetching one tag."""

    def __init__(self, tag_repository: TagRepositoryPort):
        self._tag_repository = tag_repository

    async def execute(self, tag_id: int) -> Tag:
        """Return the tag or raise TagNotFoundError."""
        tag = await self._tag_repository.find_by_id(tag_id)
        if tag is None:
            raise TagNotFoundError(tag_id)
        return tag


class ListTagsUseCase:
    """Use case for listing all tags by name."""

    def __init__(self, tag_repository: TagRepositoryPort):
        self._tag_repository = tag_repository

    async def execute(self) -> list[Tag]:
        return await self._tag_repository.find_all()
