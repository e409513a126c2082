"""Category and tag API endpoints."""

from fastapi import APIRouter, Depends, status

from src.application.ports import CategoryRepositoryPort, TagRepositoryPort
from src.application.use_cases import (
    CreateCategoryUseCase,
    CreateTagUseCase,
    GetCategoryUseCase,
    GetTagUseCase,
    ListCategoriesUseCase,
    ListTagsUseCase,
)
from src.interfaces.api.dependencies import (
    get_category_repository,
    get_tag_repository,
)
from src.interfaces.api.v1.schemas import (
    CategoryResponse,
    CreateCategoryRequest,
    CreateTagRequest,
    TagResponse,
)

categories_router = APIRouter()
tags_router = APIRouter()


@categories_router.get("", response_model=list[CategoryResponse])
async def list_categories(
    repository: CategoryRepositoryPort = Depends(get_category_repository),  # noqa: B008
) -> list[CategoryResponse]:
    categories = await ListCategoriesUseCase(repository).execute()
    return [CategoryResponse.model_validate(c) for c in categories]


@categories_router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: int,
    repository: CategoryRepositoryPort = Depends(get_category_repository),  # noqa: B008
) -> CategoryResponse:
    category = await GetCategoryUseCase(repository).execute(category_id)
    return CategoryResponse.model_validate(category)


@categories_router.post(
    "", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED
)
async def create_category(
    request: CreateCategoryRequest,
    repository: CategoryRepositoryPort = Depends(get_category_repository),  # noqa: B008
) -> CategoryResponse:
    category = await CreateCategoryUseCase(repository).execute(request.name)
    return CategoryResponse.model_validate(category)


@tags_router.get("", response_model=list[TagResponse])
async def list_tags(
    repository: TagRepositoryPort = Depends(get_tag_repository),  # noqa: B008
) -> list[TagResponse]:
    tags = await ListTagsUseCase(repository).execute()
    return [TagResponse.model_validate(t) for t in tags]


@tags_router.get("/{tag_id}", response_model=TagResponse)
async def get_tag(
    tag_id: int,
    repository: TagRepositoryPort = Depends(get_tag_repository),  # noqa: B008
) -> TagResponse:
    return TagResponse.model_validate(await GetTagUseCase(repository).execute(tag_id))


@tags_router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    request: CreateTagRequest,
    repository: TagRepositoryPort = Depends(get_tag_repository),  # noqa: B008
) -> TagResponse:
    tag = await CreateTagUseCase(repository).execute(request.name)
    return TagResponse.model_validate(tag)
