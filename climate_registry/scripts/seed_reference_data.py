"""
Create tables and seed the reference tables (agencies, locations, funding
sources, focal areas) with a starter set. Rows are matched by name, so the
script can be re-run safely.

Usage:
    registry-seed --database-url sqlite+aiosqlite:///./registry.db
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from climate_registry.core.config import get_settings
from climate_registry.core.database import Database
from climate_registry.core.logging import configure_logging
from climate_registry.models.reference import Agency, FocalArea, FundingSource, Location

log = structlog.get_logger()

REFERENCE_DATA: dict[type[SQLModel], list[dict]] = {
    Agency: [
        {"name": "Department of Environment", "type": "Implementing"},
        {"name": "Local Government Engineering Department", "type": "Executing"},
        {"name": "Department of Public Health Engineering", "type": "Executing"},
        {"name": "Infrastructure Development Company", "type": "Accredited"},
    ],
    Location: [
        {"name": "Dhaka", "region": "Central"},
        {"name": "Khulna", "region": "South-West"},
        {"name": "Barishal", "region": "South"},
        {"name": "Rangpur", "region": "North"},
        {"name": "Chattogram", "region": "South-East"},
    ],
    FundingSource: [
        {"name": "Green Climate Fund", "dev_partner": "GCF", "type": "Multilateral"},
        {"name": "Global Environment Facility", "dev_partner": "GEF", "type": "Multilateral"},
        {"name": "Adaptation Fund", "dev_partner": "AF", "type": "Multilateral"},
        {"name": "Climate Change Trust Fund", "dev_partner": "GoB", "type": "National"},
    ],
    FocalArea: [
        {"name": "Food Security"},
        {"name": "Disaster Risk Reduction"},
        {"name": "Water Resources"},
        {"name": "Energy Efficiency"},
        {"name": "Coastal Resilience"},
    ],
}


async def _seed_model(session: AsyncSession, model: type[SQLModel], rows: list[dict]) -> int:
    result = await session.execute(select(model.name))
    existing = set(result.scalars().all())
    added = 0
    for row in rows:
        if row["name"] in existing:
            continue
        session.add(model(**row))
        added += 1
    return added


async def seed_reference_data(db: Database, create_tables: bool = True) -> dict[str, int]:
    """Insert missing reference rows; returns the number added per table."""
    if create_tables:
        await db.create_all()

    added: dict[str, int] = {}
    async with db.transaction() as session:
        for model, rows in REFERENCE_DATA.items():
            added[model.__tablename__] = await _seed_model(session, model, rows)

    log.info("reference_data.seeded", **added)
    return added


async def _run(database_url: Optional[str], create_tables: bool) -> None:
    db = Database(database_url) if database_url else Database.from_settings()
    try:
        await seed_reference_data(db, create_tables=create_tables)
    finally:
        await db.dispose()


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Seed registry reference tables.")
    parser.add_argument("--database-url", help="Override REGISTRY_DATABASE_URL")
    parser.add_argument(
        "--no-create-tables",
        action="store_true",
        help="Assume the schema exists (e.g. after alembic upgrade head)",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    asyncio.run(_run(args.database_url, create_tables=not args.no_create_tables))


if __name__ == "__main__":
    main()
