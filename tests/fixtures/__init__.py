"""Shared test data builders."""

from datetime import UTC, datetime
from uuid import uuid4

from src.domain.entities import Ad, Category, Tag, User


def make_user(email: str = "seller@example.com") -> User:
    return User(id=uuid4(), email=email, created_at=datetime(2024, 1, 1, tzinfo=UTC))


def make_ad(
    title: str = "Red bike",
    description: str = "City bike, barely used",
    price: float = 120.0,
    owner: User | None = None,
    category: Category | None = None,
    tags: list[Tag] | None = None,
) -> Ad:
    """Build a fully populated Ad with a fresh id."""
    return Ad(
        id=uuid4(),
        title=title,
        description=description,
        owner=owner or make_user(),
        price=price,
        weight_grams=1500,
        picture="https://img.example.com/bike.jpg",
        location="Lyon",
        created_at=datetime(2024, 3, 1, 12, 0, tzinfo=UTC),
        category=category or Category(id=1, name="Autres"),
        tags=tags if tags is not None else [Tag(id=1, name="Occasion")],
    )
