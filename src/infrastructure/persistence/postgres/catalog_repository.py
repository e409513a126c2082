"""SQLAlchemy implementations of the category and tag repositories."""

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.ports.catalog_repository import (
    CategoryRepositoryPort,
    TagRepositoryPort,
)
from src.domain.entities import Category, Tag
from src.infrastructure.persistence.postgres.models import CategoryModel, TagModel

logger = structlog.get_logger(__name__)


class PostgresCategoryRepository(CategoryRepositoryPort):
    """SQLAlchemy implementation of Category repository."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, category_id: int) -> Category | None:
        db_category = await self.session.get(CategoryModel, category_id)
        return db_category.to_domain_entity() if db_category else None

    async def find_all(self) -> list[Category]:
        result = await self.session.execute(
            select(CategoryModel).order_by(CategoryModel.name, CategoryModel.id)
        )
        return [row.to_domain_entity() for row in result.scalars().all()]

    async def save(self, category: Category) -> Category:
        db_category = CategoryModel(id=category.id, name=category.name)
        db_category = await self.session.merge(db_category)
        await self.session.flush()

        logger.info("category_saved", category_id=db_category.id, name=category.name)
        return db_category.to_domain_entity()


class PostgresTagRepository(TagRepositoryPort):
    """SQLAlchemy implementation of Tag repository."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, tag_id: int) -> Tag | None:
        db_tag = await self.session.get(TagModel, tag_id)
        return db_tag.to_domain_entity() if db_tag else None

    async def find_all(self) -> list[Tag]:
        result = await self.session.execute(
            select(TagModel).order_by(TagModel.name, TagModel.id)
        )
        return [row.to_domain_entity() for row in result.scalars().all()]

    async def save(self, tag: Tag) -> Tag:
        db_tag = TagModel(id=tag.id, name=tag.name)
        db_tag = await self.session.merge(db_tag)
        await self.session.flush()

        logger.info("tag_saved", tag_id=db_tag.id, name=tag.name)
        return db_tag.to_domain_entity()
