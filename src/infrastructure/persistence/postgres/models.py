"""SQLAlchemy models for the relational store.

This module defines the ORM models that map to database tables. Column
types are portable so the same models run on PostgreSQL and SQLite.
"""

import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import (
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    Uuid,
)
from sqlalchemy.orm import declarative_base, relationship

from src.domain.entities import Ad, Category, Tag, User

Base: Any = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


tags_for_ads = Table(
    "tags_for_ads",
    Base.metadata,
    Column(
        "ad_id",
        Uuid,
        ForeignKey("ads.id", ondelete="CASCADE", name="fk_tags_for_ads_ad_id"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        Integer,
        ForeignKey("tags.id", ondelete="CASCADE", name="fk_tags_for_ads_tag_id"),
        primary_key=True,
    ),
)


class UserModel(Base):
    """ORM model for users table."""

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    ads = relationship("AdModel", back_populates="owner")

    def to_domain_entity(self) -> User:
        """Convert ORM model to domain entity."""
        return User(id=self.id, email=self.email, created_at=self.created_at)


class CategoryModel(Base):
    """ORM model for categories table."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)

    ads = relationship("AdModel", back_populates="category")

    def to_domain_entity(self) -> Category:
        """Convert ORM model to domain entity."""
        return Category(id=self.id, name=self.name)


class TagModel(Base):
    """ORM model for tags table."""

    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)

    ads = relationship("AdModel", secondary=tags_for_ads, back_populates="tags")

    def to_domain_entity(self) -> Tag:
        """Convert ORM model to domain entity."""
        return Tag(id=self.id, name=self.name)


class AdModel(Base):
    """ORM model for ads table.

    Owner, category and tags load eagerly with every ad.
    """

    __tablename__ = "ads"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Float, nullable=False)
    weight_grams = Column(Integer, nullable=False, default=0)
    picture = Column(String(2048), nullable=False, default="")
    location = Column(String(255), nullable=False, default="")
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    owner_id = Column(
        Uuid,
        ForeignKey("users.id", name="fk_ads_owner_id"),
        nullable=False,
    )
    category_id = Column(
        Integer,
        ForeignKey("categories.id", name="fk_ads_category_id"),
        nullable=False,
    )

    owner = relationship("UserModel", back_populates="ads", lazy="selectin")
    category = relationship("CategoryModel", back_populates="ads", lazy="selectin")
    tags = relationship(
        "TagModel",
        secondary=tags_for_ads,
        back_populates="ads",
        lazy="selectin",
        order_by="TagModel.id",
    )

    __table_args__ = (
        Index("idx_ads_created_at", "created_at"),
        Index("idx_ads_category_id", "category_id"),
    )

    def to_domain_entity(self) -> Ad:
        """Convert ORM model to domain entity.

        Requires owner, category and tags to be loaded.
        """
        return Ad(
            id=self.id,
            title=self.title,
            description=self.description,
            owner=self.owner.to_domain_entity(),
            price=self.price,
            weight_grams=self.weight_grams,
            picture=self.picture,
            location=self.location,
            created_at=self.created_at,
            category=self.category.to_domain_entity(),
            tags=[tag.to_domain_entity() for tag in self.tags],
        )

    def apply_domain_entity(self, entity: Ad) -> None:
        """Copy scalar fields and relation keys from a domain entity.

        Tags are handled by the repository since they need loaded models.
        """
        self.title = entity.title
        self.description = entity.description
        self.price = entity.price
        self.weight_grams = entity.weight_grams
        self.picture = entity.picture
        self.location = entity.location
        self.owner_id = entity.owner.id
        self.category_id = entity.category.id
