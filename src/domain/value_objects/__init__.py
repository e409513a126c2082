"""Value objects for The Good Corner domain layer."""

from .ad_search_query import AdSearchQuery, SearchOrder

__all__ = ["AdSearchQuery", "SearchOrder"]
