"""Relational persistence adapters (PostgreSQL by default, any async SQLAlchemy URL)."""

from .ad_repository import PostgresAdRepository
from .catalog_repository import PostgresCategoryRepository, PostgresTagRepository
from .connection import (
    DatabaseConnection,
    close_db_connection,
    get_db_connection,
)
from .models import AdModel, Base, CategoryModel, TagModel, UserModel
from .user_repository import PostgresUserRepository

__all__ = [
    "AdModel",
    "Base",
    "CategoryModel",
    "DatabaseConnection",
    "PostgresAdRepository",
    "PostgresCategoryRepository",
    "PostgresTagRepository",
    "PostgresUserRepository",
    "TagModel",
    "UserModel",
    "close_db_connection",
    "get_db_connection",
]
