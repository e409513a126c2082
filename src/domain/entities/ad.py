"""Ad entity for the classified-ads marketplace.

An ad is owned by exactly one user, filed under exactly one category and
labelled with any number of tags. The entity is a plain data shape; loading
and saving it is the job of an AdRepositoryPort implementation.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .catalog import Category, Tag
from .user import User


class Ad(BaseModel):
    """A classified ad as served by the API and stored in the search cache."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID | None = Field(None, description="Ad identifier")
    title: str = Field(..., min_length=1, max_length=255, description="Ad title")
    description: str = Field("", description="Free-text description")
    owner: User = Field(..., description="User who published the ad")
    price: float = Field(..., ge=0, description="Asking price in euros")
    weight_grams: int = Field(0, ge=0, description="Shipping weight in grams")
    picture: str = Field("", description="Picture URL")
    location: str = Field("", description="Where the item can be picked up")
    created_at: datetime | None = Field(None, description="Publication timestamp")
    category: Category = Field(..., description="Category the ad is filed under")
    tags: list[Tag] = Field(default_factory=list, description="Tags on the ad")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Ensure the title is not blank."""
        if not v.strip():
            raise ValueError("Ad title cannot be blank")
        return v

    def string_representation(self) -> str:
        """One-line summary used by the CLI and in log lines."""
        return f"{self.id} | {self.title} | {self.owner.email} | {self.price} €"


class AdDraft(BaseModel):
    """Caller-supplied fields for creating an ad.

    Relations are given by identifier; the use case resolves them before
    anything is written.
    """

    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    price: float = Field(..., ge=0)
    weight_grams: int = Field(0, ge=0)
    picture: str = ""
    location: str = ""
    category_id: int
    tag_ids: list[int] = Field(default_factory=list)


class AdPatch(BaseModel):
    """Partial update of an ad. Only fields explicitly set are applied."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    price: float | None = Field(None, ge=0)
    weight_grams: int | None = Field(None, ge=0)
    picture: str | None = None
    location: str | None = None
    category_id: int | None = None
    tag_ids: list[int] | None = None
