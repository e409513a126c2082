"""User entity: the owner of ads."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class User(BaseModel):
    """A marketplace member who publishes ads."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID | None = Field(None, description="User identifier")
    email: str = Field(
        ...,
        min_length=3,
        max_length=255,
        description="Unique e-mail address",
        examples=["jane@example.com"],
    )
    created_at: datetime | None = Field(
        None, description="Timestamp when the user registered"
    )

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Normalize and sanity-check the e-mail address."""
        v = v.strip().lower()
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError("Email must contain a local part and a domain")
        return v
