"""Ad search query value object.

The search text is kept exactly as the user typed it: it doubles as the
cache key, so two queries that differ only in case or surrounding spaces
are distinct queries.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SearchOrder(str, Enum):
    """Ordering applied to text search results."""

    STORE = "store"  # whatever order the database returns
    NEWEST_FIRST = "newest_first"
    OLDEST_FIRST = "oldest_first"


class AdSearchQuery(BaseModel):
    """Value object representing a substring search over ads.

    Attributes:
        text: Raw search string, matched case-insensitively against title
            and description
        limit: Optional maximum number of ads to return (None = unbounded)
        order: Ordering applied to the matches
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Raw search string, possibly empty")
    limit: int | None = Field(None, ge=1, description="Maximum number of ads")
    order: SearchOrder = Field(SearchOrder.STORE, description="Result ordering")
