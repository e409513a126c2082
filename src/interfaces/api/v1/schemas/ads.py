"""
Pydantic models for ad, category, tag and user endpoints.

These models define the contract for the REST API, ensuring type safety
and automatic validation for all requests and responses.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.domain.entities import AdDraft, AdPatch


class CategoryResponse(BaseModel):
    """A category as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Category identifier")
    name: str = Field(..., description="Category name", examples=["Vehicles"])


class TagResponse(BaseModel):
    """A tag as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Tag identifier")
    name: str = Field(..., description="Tag name", examples=["vintage"])


class UserResponse(BaseModel):
    """A user as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., description="User identifier")
    email: str = Field(..., description="E-mail address")
    created_at: datetime | None = Field(None, description="Registration timestamp")


class AdResponse(BaseModel):
    """An ad with its owner, category and tags."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    owner: UserResponse
    price: float = Field(..., description="Asking price in euros")
    weight_grams: int
    picture: str
    location: str
    created_at: datetime | None
    category: CategoryResponse
    tags: list[TagResponse]


class CreateAdRequest(BaseModel):
    """
    Request model for publishing an ad.

    Attributes:
        owner_id: Identifier of the publishing user
        category_id: Category the ad is filed under
        tag_ids: Tags to attach, may be empty
    """

    owner_id: UUID
    title: str = Field(..., min_length=1, max_length=255, examples=["Red Bike"])
    description: str = Field("", examples=["City bike, barely used"])
    price: float = Field(..., ge=0, examples=[120.0])
    weight_grams: int = Field(0, ge=0, examples=[14000])
    picture: str = Field("", examples=["https://example.com/bike.jpg"])
    location: str = Field("", examples=["Lyon"])
    category_id: int
    tag_ids: list[int] = Field(default_factory=list)

    def to_draft(self) -> AdDraft:
        """Convert to the domain draft, dropping the owner."""
        return AdDraft(**self.model_dump(exclude={"owner_id"}))


class UpdateAdRequest(BaseModel):
    """Request model for a partial ad update. Omitted fields are unchanged."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    price: float | None = Field(None, ge=0)
    weight_grams: int | None = Field(None, ge=0)
    picture: str | None = None
    location: str | None = None
    category_id: int | None = None
    tag_ids: list[int] | None = None

    def to_patch(self) -> AdPatch:
        """Convert to the domain patch, keeping track of which fields were sent."""
        return AdPatch(**self.model_dump(exclude_unset=True))


class CreateCategoryRequest(BaseModel):
    """Request model for creating a category."""

    name: str = Field(..., min_length=1, max_length=100, examples=["Vehicles"])


class CreateTagRequest(BaseModel):
    """Request model for creating a tag."""

    name: str = Field(..., min_length=1, max_length=100, examples=["vintage"])


class CreateUserRequest(BaseModel):
    """Request model for registering a user."""

    email: str = Field(..., min_length=3, max_length=255, examples=["jane@example.com"])
