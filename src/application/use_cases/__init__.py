"""Application use cases for The Good Corner."""

from .browse_ads import GetAdUseCase, ListAdsUseCase
from .manage_ads import CreateAdUseCase, DeleteAdUseCase, UpdateAdUseCase
from .manage_catalog import (
    CreateCategoryUseCase,
    CreateTagUseCase,
    GetCategoryUseCase,
    GetTagUseCase,
    ListCategoriesUseCase,
    ListTagsUseCase,
)
from .manage_users import CreateUserUseCase, GetUserUseCase
from .search_ads import SearchAdsUseCase

__all__ = [
    "CreateAdUseCase",
    "CreateCategoryUseCase",
    "CreateTagUseCase",
    "CreateUserUseCase",
    "DeleteAdUseCase",
    "GetAdUseCase",
    "GetCategoryUseCase",
    "GetTagUseCase",
    "GetUserUseCase",
    "ListAdsUseCase",
    "ListCategoriesUseCase",
    "ListTagsUseCase",
    "SearchAdsUseCase",
    "UpdateAdUseCase",
]
