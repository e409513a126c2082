"""
Ad API endpoints.

Listing, lookup, text search and the create/update/delete operations.
Domain errors (unknown ad, category, tag or owner) propagate to the
registered exception handlers.
"""

from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, Query, status

from src.application.use_cases import (
    CreateAdUseCase,
    DeleteAdUseCase,
    GetAdUseCase,
    ListAdsUseCase,
    SearchAdsUseCase,
    UpdateAdUseCase,
)
from src.interfaces.api.dependencies import (
    get_create_ad_use_case,
    get_delete_ad_use_case,
    get_get_ad_use_case,
    get_list_ads_use_case,
    get_search_ads_use_case,
    get_update_ad_use_case,
)
from src.interfaces.api.v1.schemas import AdResponse, CreateAdRequest, UpdateAdRequest

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get(
    "",
    response_model=list[AdResponse],
    summary="List recent ads",
    description="Newest ads first, optionally restricted to one category.",
)
async def list_ads(
    category_id: int | None = Query(None, description="Only ads in this category"),
    use_case: ListAdsUseCase = Depends(get_list_ads_use_case),  # noqa: B008
) -> list[AdResponse]:
    ads = await use_case.execute(category_id=category_id)
    return [AdResponse.model_validate(ad) for ad in ads]


@router.get(
    "/search",
    response_model=list[AdResponse],
    summary="Search ads by text",
    description=(
        "Case-insensitive substring match on title and description. "
        "Results may be served from a cache for up to ten minutes."
    ),
)
async def search_ads(
    query: str = Query("", description="Text to look for; empty matches every ad"),
    use_case: SearchAdsUseCase = Depends(get_search_ads_use_case),  # noqa: B008
) -> list[AdResponse]:
    """
    Search ads whose title or description contains the query.

    Args:
        query: Raw search text, used as-is
        use_case: Injected search use case

    Returns:
        Matching ads
    """
    ads = await use_case.execute(query)
    return [AdResponse.model_validate(ad) for ad in ads]


@router.get("/{ad_id}", response_model=AdResponse, summary="Get an ad")
async def get_ad(
    ad_id: UUID,
    use_case: GetAdUseCase = Depends(get_get_ad_use_case),  # noqa: B008
) -> AdResponse:
    return AdResponse.model_validate(await use_case.execute(ad_id))


@router.post(
    "",
    response_model=AdResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Publish an ad",
)
async def create_ad(
    request: CreateAdRequest,
    use_case: CreateAdUseCase = Depends(get_create_ad_use_case),  # noqa: B008
) -> AdResponse:
    ad = await use_case.execute(request.owner_id, request.to_draft())
    return AdResponse.model_validate(ad)


@router.patch("/{ad_id}", response_model=AdResponse, summary="Update an ad")
async def update_ad(
    ad_id: UUID,
    request: UpdateAdRequest,
    use_case: UpdateAdUseCase = Depends(get_update_ad_use_case),  # noqa: B008
) -> AdResponse:
    ad = await use_case.execute(ad_id, request.to_patch())
    return AdResponse.model_validate(ad)


@router.delete(
    "/{ad_id}",
    response_model=AdResponse,
    summary="Delete an ad",
    description="Deletes the ad and returns it as it was before deletion.",
)
async def delete_ad(
    ad_id: UUID,
    use_case: DeleteAdUseCase = Depends(get_delete_ad_use_case),  # noqa: B008
) -> AdResponse:
    ad = await use_case.execute(ad_id)
    logger.info("ad_deleted_via_api", ad_id=str(ad_id))
    return AdResponse.model_validate(ad)
