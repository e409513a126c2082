"""Catalog entities: categories and tags that classify ads."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Category(BaseModel):
    """A category every ad belongs to (e.g. "Vehicles", "Furniture")."""

    model_config = ConfigDict(from_attributes=True)

    id: int | None = Field(None, description="Category identifier")
    name: str = Field(..., min_length=1, max_length=100, description="Category name")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject blank names and trim surrounding whitespace."""
        if not v.strip():
            raise ValueError("Category name cannot be blank")
        return v.strip()


class Tag(BaseModel):
    """A free-form label attached to zero or more ads."""

    model_config = ConfigDict(from_attributes=True)

    id: int | None = Field(None, description="Tag identifier")
    name: str = Field(..., min_length=1, max_length=100, description="Tag name")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject blank names and trim surrounding whitespace."""
        if not v.strip():
            raise ValueError("Tag name cannot be blank")
        return v.strip()
