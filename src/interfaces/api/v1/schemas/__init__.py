"""
Pydantic schemas for API v1.

This module exports all request and response models for the API endpoints.
"""

from src.interfaces.api.v1.schemas.ads import (
    AdResponse,
    CategoryResponse,
    CreateAdRequest,
    CreateCategoryRequest,
    CreateTagRequest,
    CreateUserRequest,
    TagResponse,
    UpdateAdRequest,
    UserResponse,
)

__all__ = [
    "AdResponse",
    "CategoryResponse",
    "CreateAdRequest",
    "CreateCategoryRequest",
    "CreateTagRequest",
    "CreateUserRequest",
    "TagResponse",
    "UpdateAdRequest",
    "UserResponse",
]
