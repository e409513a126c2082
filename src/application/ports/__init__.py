"""Application layer ports for The Good Corner."""

from .ad_repository import AdRepositoryPort
from .cache_port import CachePort
from .catalog_repository import CategoryRepositoryPort, TagRepositoryPort
from .user_repository import UserRepositoryPort

__all__ = [
    "AdRepositoryPort",
    "CachePort",
    "CategoryRepositoryPort",
    "TagRepositoryPort",
    "UserRepositoryPort",
]
