"""Domain entities for The Good Corner."""

from .ad import Ad, AdDraft, AdPatch
from .catalog import Category, Tag
from .user import User

__all__ = [
    "Ad",
    "AdDraft",
    "AdPatch",
    "Category",
    "Tag",
    "User",
]
