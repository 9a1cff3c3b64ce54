"""
Shared fixtures: a throwaway SQLite registry per test, seeded reference rows,
and a small payload factory.
"""

from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy import func
from sqlmodel import select

from climate_registry.core.database import Database
from climate_registry.models.reference import Agency, FocalArea, FundingSource, Location
from climate_registry.services import (
    ApprovalWorkflow,
    PendingProjectRepository,
    ProjectRepository,
)
from climate_registry_shared.schemas.common import ProjectType
from climate_registry_shared.schemas.pending_projects import PendingProjectSubmit
from climate_registry_shared.schemas.projects import ProjectCreate


@pytest.fixture
async def db(tmp_path):
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'registry.db'}")
    await database.create_all()
    yield database
    await database.dispose()


@pytest.fixture
async def reference(db):
    """Agencies 1-3, locations 1-3, funding sources 1-2, focal areas 1-2."""
    async with db.transaction() as session:
        session.add_all(
            [
                Agency(agency_id=1, name="Department of Environment", type="Implementing"),
                Agency(agency_id=2, name="Local Government Engineering Department", type="Executing"),
                Agency(agency_id=3, name="Department of Public Health Engineering", type="Executing"),
                Location(location_id=1, name="Dhaka", region="Central"),
                Location(location_id=2, name="Khulna", region="South-West"),
                Location(location_id=3, name="Barishal", region="South"),
                FundingSource(
                    funding_source_id=1,
                    name="Green Climate Fund",
                    dev_partner="GCF",
                    grant_amount=1_000_000,
                ),
                FundingSource(funding_source_id=2, name="Adaptation Fund", dev_partner="AF"),
                FocalArea(focal_area_id=1, name="Water Resources"),
                FocalArea(focal_area_id=2, name="Coastal Resilience"),
            ]
        )
    return db


@pytest.fixture
def projects(reference):
    return ProjectRepository(reference)


@pytest.fixture
def pending(reference):
    return PendingProjectRepository(reference)


@pytest.fixture
def workflow(reference):
    return ApprovalWorkflow(reference)


@pytest.fixture
def count_rows(db):
    """Count rows of a model, optionally filtered by column equality."""

    async def _count(model, **where) -> int:
        stmt = select(func.count()).select_from(model)
        for column, value in where.items():
            stmt = stmt.where(getattr(model, column) == value)
        async with db.session() as session:
            result = await session.execute(stmt)
            return result.scalar_one()

    return _count


def project_data(**overrides) -> dict:
    data = {
        "title": "Coastal Embankment Improvement",
        "type": ProjectType.ADAPTATION,
        "sector": "Water",
        "division": "Khulna",
        "status": "Active",
        "approval_fy": 2024,
        "beginning": date(2024, 7, 1),
        "closing": date(2028, 6, 30),
        "total_cost_usd": 12_500_000.0,
        "gef_grant": 8_000_000.0,
        "cofinancing": 4_500_000.0,
        "disbursement": 1_200_000.0,
        "wash_finance": True,
        "wash_finance_percent": 15.0,
        "beneficiaries": "120,000 coastal households",
        "objectives": "Reduce storm-surge exposure in polder areas.",
    }
    data.update(overrides)
    return data


@pytest.fixture
def make_project():
    def _make(**overrides) -> ProjectCreate:
        return ProjectCreate(**project_data(**overrides))

    return _make


@pytest.fixture
def make_submission():
    def _make(**overrides) -> PendingProjectSubmit:
        overrides.setdefault("submitter_email", "officer@moef.gov.bd")
        return PendingProjectSubmit(**project_data(**overrides))

    return _make
