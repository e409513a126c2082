#!/usr/bin/env python3
"""Management CLI for The Good Corner.

Creates the schema, loads a small demo catalog and runs ad searches
against the configured database and cache from the command line.
"""

import asyncio
import sys

import click
import structlog
from rich.console import Console
from rich.table import Table

from src.application.use_cases import (
    CreateAdUseCase,
    CreateCategoryUseCase,
    CreateTagUseCase,
    CreateUserUseCase,
    SearchAdsUseCase,
)
from src.domain.entities import Ad, AdDraft
from src.domain.value_objects import SearchOrder
from src.infrastructure.caching import close_search_cache, get_search_cache
from src.infrastructure.persistence.postgres import (
    PostgresAdRepository,
    PostgresCategoryRepository,
    PostgresTagRepository,
    PostgresUserRepository,
    close_db_connection,
    get_db_connection,
)
from src.shared.config.settings import get_settings
from src.shared.exceptions import GoodCornerException
from src.shared.utils import configure_logging

logger = structlog.get_logger(__name__)
console = Console()

SEED_CATEGORIES = ["Vêtements", "Voitures", "Autres"]
SEED_TAGS = ["Neuf", "Occasion", "Urgent"]
SEED_OWNER = "seller@goodcorner.example"
SEED_ADS = [
    {
        "title": "Red bike",
        "description": "City bike, barely used",
        "price": 120.0,
        "weight_grams": 14000,
        "location": "Lyon",
        "category": "Autres",
        "tags": ["Occasion"],
    },
    {
        "title": "Winter coat",
        "description": "Warm wool coat, size M",
        "price": 45.0,
        "weight_grams": 1200,
        "location": "Paris",
        "category": "Vêtements",
        "tags": ["Neuf"],
    },
    {
        "title": "Blue car",
        "description": "Small red-and-blue city car",
        "price": 3500.0,
        "weight_grams": 900000,
        "location": "Bordeaux",
        "category": "Voitures",
        "tags": ["Occasion", "Urgent"],
    },
]


def format_ads(ads: list[Ad], title: str) -> Table:
    """Format ads as a rich table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", style="green")
    table.add_column("Owner")
    table.add_column("Category")
    table.add_column("Price", justify="right")

    for ad in ads:
        table.add_row(
            str(ad.id), ad.title, ad.owner.email, ad.category.name, f"{ad.price} €"
        )
    return table


async def _init_db() -> None:
    connection = await get_db_connection()
    try:
        await connection.create_tables()
    finally:
        await close_db_connection()


async def _seed() -> list[Ad]:
    connection = await get_db_connection()
    try:
        await connection.create_tables()
        async with connection.get_session() as session:
            categories = PostgresCategoryRepository(session)
            tags = PostgresTagRepository(session)
            users = PostgresUserRepository(session)

            category_ids = {}
            for name in SEED_CATEGORIES:
                category = await CreateCategoryUseCase(categories).execute(name)
                category_ids[name] = category.id
            tag_ids = {}
            for name in SEED_TAGS:
                tag = await CreateTagUseCase(tags).execute(name)
                tag_ids[name] = tag.id
            owner = await CreateUserUseCase(users).execute(SEED_OWNER)

            create_ad = CreateAdUseCase(
                ad_repository=PostgresAdRepository(session),
                category_repository=categories,
                tag_repository=tags,
                user_repository=users,
            )
            created = []
            for seed_ad in SEED_ADS:
                draft = AdDraft(
                    title=seed_ad["title"],
                    description=seed_ad["description"],
                    price=seed_ad["price"],
                    weight_grams=seed_ad["weight_grams"],
                    location=seed_ad["location"],
                    category_id=category_ids[seed_ad["category"]],
                    tag_ids=[tag_ids[name] for name in seed_ad["tags"]],
                )
                created.append(await create_ad.execute(owner.id, draft))
            return created
    finally:
        await close_db_connection()


async def _search(query: str, use_cache: bool) -> list[Ad]:
    settings = get_settings()
    connection = await get_db_connection()
    try:
        async with connection.get_session() as session:
            use_case = SearchAdsUseCase(
                ad_repository=PostgresAdRepository(session),
                cache=get_search_cache() if use_cache else None,
                ttl_seconds=settings.cache.search_cache_ttl_seconds,
                result_limit=settings.search.search_result_limit,
                order=SearchOrder(settings.search.search_order),
            )
            return await use_case.execute(query)
    finally:
        await close_search_cache()
        await close_db_connection()


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def cli(debug: bool) -> None:
    """Manage The Good Corner database and search."""
    configure_logging("DEBUG" if debug else "WARNING")


@cli.command("init-db")
def init_db() -> None:
    """Create all tables that do not exist yet."""
    asyncio.run(_init_db())
    console.print("[green]✓[/green] Database schema is up to date")


@cli.command()
def seed() -> None:
    """Load a few demo categories, tags, a user and ads."""
    try:
        ads = asyncio.run(_seed())
    except GoodCornerException as e:
        console.print(f"[red]Seeding failed:[/red] {e.message}")
        sys.exit(1)
    console.print(format_ads(ads, title="Seeded ads"))


@cli.command()
@click.argument("query", default="")
@click.option(
    "--no-cache", is_flag=True, help="Query the database directly, bypassing the cache"
)
def search(query: str, no_cache: bool) -> None:
    """Search ads whose title or description contains QUERY."""
    try:
        ads = asyncio.run(_search(query, use_cache=not no_cache))
    except GoodCornerException as e:
        console.print(f"[red]Search failed:[/red] {e.message}")
        sys.exit(1)

    if not ads:
        console.print(f"[yellow]No ads match '{query}'[/yellow]")
        return
    console.print(format_ads(ads, title=f"Ads matching '{query}'"))


if __name__ == "__main__":
    cli()
