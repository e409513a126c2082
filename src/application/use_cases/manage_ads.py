"""Create, update and delete ads.

Category, tag and owner identifiers are resolved before anything is
written: an unknown identifier aborts the operation with a NotFound error
and the repository is never asked to save.
"""

from uuid import UUID

import structlog

from src.application.ports import (
    AdRepositoryPort,
    CategoryRepositoryPort,
    TagRepositoryPort,
    UserRepositoryPort,
)
from src.domain.entities import Ad, AdDraft, AdPatch, Category, Tag, User
from src.shared.exceptions import (
    AdNotFoundError,
    CategoryNotFoundError,
    TagNotFoundError,
    UserNotFoundError,
)

logger = structlog.get_logger(__name__)


async def resolve_category(
    category_repository: CategoryRepositoryPort, category_id: int
) -> Category:
    """Load a category or raise CategoryNotFoundError."""
    category = await category_repository.find_by_id(category_id)
    if category is None:
        raise CategoryNotFoundError(category_id)
    return category


async def resolve_tags(tag_repository: TagRepositoryPort, tag_ids: list[int]) -> list[Tag]:
    """Load every tag in ``tag_ids`` (in order) or raise TagNotFoundError.

    Lookups run one after another since they share a single session.
    """
    tags = []
    for tag_id in tag_ids:
        tag = await tag_repository.find_by_id(tag_id)
        if tag is None:
            raise TagNotFoundError(tag_id)
        tags.append(tag)
    return tags


async def resolve_owner(user_repository: UserRepositoryPort, owner_id: UUID) -> User:
    """Load the ad owner or raise UserNotFoundError."""
    owner = await user_repository.find_by_id(owner_id)
    if owner is None:
        raise UserNotFoundError(owner_id)
    return owner


class CreateAdUseCase:
    """Use case for publishing a new ad."""

    def __init__(
        self,
        ad_repository: AdRepositoryPort,
        category_repository: CategoryRepositoryPort,
        tag_repository: TagRepositoryPort,
        user_repository: UserRepositoryPort,
    ):
        self._ad_repository = ad_repository
        self._category_repository = category_repository
        self._tag_repository = tag_repository
        self._user_repository = user_repository

    async def execute(self, owner_id: UUID, draft: AdDraft) -> Ad:
        """Create an ad owned by ``owner_id``.

        Args:
            owner_id: Identifier of the publishing user
            draft: Ad fields with category and tag identifiers

        Returns:
            The saved ad

        Raises:
            UserNotFoundError: If the owner does not exist
            CategoryNotFoundError: If the category does not exist
            TagNotFoundError: If any tag does not exist
        """
        owner = await resolve_owner(self._user_repository, owner_id)
        category = await resolve_category(self._category_repository, draft.category_id)
        tags = await resolve_tags(self._tag_repository, draft.tag_ids)

        ad = Ad(
            title=draft.title,
            description=draft.description,
            owner=owner,
            price=draft.price,
            weight_grams=draft.weight_grams,
            picture=draft.picture,
            location=draft.location,
            category=category,
            tags=tags,
        )
        saved = await self._ad_repository.save(ad)

        logger.info("ad_published", ad=saved.string_representation())
        return saved


class UpdateAdUseCase:
    """Use case for partially updating an existing ad."""

    def __init__(
        self,
        ad_repository: AdRepositoryPort,
        category_repository: CategoryRepositoryPort,
        tag_repository: TagRepositoryPort,
    ):
        self._ad_repository = ad_repository
        self._category_repository = category_repository
        self._tag_repository = tag_repository

    async def execute(self, ad_id: UUID, patch: AdPatch) -> Ad:
        """Apply the fields set in ``patch`` to the ad.

        Args:
            ad_id: Identifier of the ad to update
            patch: Fields to change; unset and null fields are left alone

        Returns:
            The updated ad as reloaded from the store

        Raises:
            AdNotFoundError: If the ad does not exist
            CategoryNotFoundError: If a new category does not exist
            TagNotFoundError: If any new tag does not exist
        """
        ad = await self._ad_repository.find_by_id(ad_id)
        if ad is None:
            raise AdNotFoundError(ad_id)

        changes = patch.model_dump(exclude_unset=True, exclude_none=True)
        category_id = changes.pop("category_id", None)
        tag_ids = changes.pop("tag_ids", None)

        if category_id is not None:
            changes["category"] = await resolve_category(
                self._category_repository, category_id
            )
        if tag_ids is not None:
            changes["tags"] = await resolve_tags(self._tag_repository, tag_ids)

        updated = ad.model_copy(update=changes)
        saved = await self._ad_repository.save(updated)

        logger.info("ad_patched", ad_id=str(ad_id), fields=sorted(changes))
        return saved


class DeleteAdUseCase:
    """Use case for removing an ad."""

    def __init__(self, ad_repository: AdRepositoryPort):
        self._ad_repository = ad_repository

    async def execute(self, ad_id: UUID) -> Ad:
        """Delete the ad and return it as it was before deletion.

        Raises:
            AdNotFoundError: If the ad does not exist
        """
        ad = await self._ad_repository.find_by_id(ad_id)
        if ad is None:
            raise AdNotFoundError(ad_id)

        await self._ad_repository.delete(ad_id)
        return ad
