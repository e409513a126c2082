"""SQLAlchemy implementation of AdRepositoryPort.

This module provides the concrete Ad repository using async SQLAlchemy.
"""

from uuid import UUID, uuid4

import structlog
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.ports.ad_repository import AdRepositoryPort
from src.domain.entities import Ad
from src.domain.value_objects import AdSearchQuery, SearchOrder
from src.infrastructure.persistence.postgres.models import AdModel, TagModel
from src.shared.exceptions import TagNotFoundError

logger = structlog.get_logger(__name__)


class PostgresAdRepository(AdRepositoryPort):
    """SQLAlchemy implementation of Ad repository."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session.

        Args:
            session: AsyncSession instance for database operations
        """
        self.session = session

    async def find_by_id(self, ad_id: UUID) -> Ad | None:
        """Find an ad by its ID.

        Args:
            ad_id: The UUID of the ad

        Returns:
            Ad if found, None otherwise
        """
        db_ad = await self._get_model(ad_id)
        return db_ad.to_domain_entity() if db_ad else None

    async def search_by_text(self, query: AdSearchQuery) -> list[Ad]:
        """Find ads whose title or description contains the query text.

        ``icontains`` with autoescape makes ``%`` and ``_`` in the text match
        literally, so this is a plain case-insensitive substring match.

        Args:
            query: Search text plus optional ordering and limit

        Returns:
            List of matching ads
        """
        stmt = select(AdModel).where(
            or_(
                AdModel.title.icontains(query.text, autoescape=True),
                AdModel.description.icontains(query.text, autoescape=True),
            )
        )

        if query.order == SearchOrder.NEWEST_FIRST:
            stmt = stmt.order_by(AdModel.created_at.desc())
        elif query.order == SearchOrder.OLDEST_FIRST:
            stmt = stmt.order_by(AdModel.created_at.asc())

        if query.limit is not None:
            stmt = stmt.limit(query.limit)

        result = await self.session.execute(stmt)
        db_ads = result.scalars().all()

        logger.debug("ads_text_search", text=query.text, matches=len(db_ads))
        return [db_ad.to_domain_entity() for db_ad in db_ads]

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
        stmt = select(AdModel)
        if category_id is not None:
            stmt = stmt.where(AdModel.category_id == category_id)
        stmt = stmt.order_by(AdModel.created_at.desc()).limit(limit)

        result = await self.session.execute(stmt)
        return [db_ad.to_domain_entity() for db_ad in result.scalars().all()]

    async def save(self, ad: Ad) -> Ad:
        """Insert a new ad or update an existing one.

        Args:
            ad: The ad to persist; ``ad.id`` is None for a new ad

        Returns:
            The persisted ad, reloaded from the store
        """
        # Tags are loaded before the ad joins the session so the query does
        # not autoflush a half-built row.
        tags = await self._load_tags([tag.id for tag in ad.tags])

        db_ad = await self._get_model(ad.id) if ad.id is not None else None
        is_new = db_ad is None

        if db_ad is None:
            db_ad = AdModel(id=ad.id or uuid4(), tags=tags)
            db_ad.apply_domain_entity(ad)
            self.session.add(db_ad)
        else:
            # Replacing a collection needs the current one loaded; an implicit
            # lazy load is not allowed under asyncio.
            await self.session.refresh(db_ad, attribute_names=["tags"])
            db_ad.apply_domain_entity(ad)
            db_ad.tags = tags

        await self.session.flush()

        reloaded = await self._get_model(db_ad.id, refresh=True)
        logger.info(
            "ad_created" if is_new else "ad_updated",
            ad_id=str(db_ad.id),
            category_id=db_ad.category_id,
            tag_count=len(ad.tags),
        )
        return reloaded.to_domain_entity()

    async def delete(self, ad_id: UUID) -> bool:
        """Delete an ad and its tag associations.

        Args:
            ad_id: The UUID of the ad

        Returns:
            True if an ad was deleted, False if it did not exist
        """
        db_ad = await self._get_model(ad_id)
        if db_ad is None:
            return False

        await self.session.delete(db_ad)
        await self.session.flush()

        logger.info("ad_deleted", ad_id=str(ad_id))
        return True

    async def _get_model(self, ad_id: UUID, refresh: bool = False) -> AdModel | None:
        stmt = select(AdModel).where(AdModel.id == ad_id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def _load_tags(self, tag_ids: list[int | None]) -> list[TagModel]:
        """Load tag models in the given order, dropping duplicates."""
        wanted = list(dict.fromkeys(tag_id for tag_id in tag_ids if tag_id is not None))
        if not wanted:
            return []

        result = await self.session.execute(
            select(TagModel).where(TagModel.id.in_(wanted))
        )
        by_id = {tag.id: tag for tag in result.scalars().all()}

        missing = [tag_id for tag_id in wanted if tag_id not in by_id]
        if missing:
            raise TagNotFoundError(missing[0])
        return [by_id[tag_id] for tag_id in wanted]
