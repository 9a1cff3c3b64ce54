"""
Relationship-set and WASH sub-record statements.

These helpers run inside a caller-owned session and never commit; the
project and approval services compose them into one transaction.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Iterable, Optional

from sqlalchemy import delete
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from climate_registry.models.assignments import (
    ProjectAgency,
    ProjectFocalArea,
    ProjectFundingSource,
    ProjectLocation,
)
from climate_registry.models.reference import Agency, FocalArea, FundingSource, Location
from climate_registry.models.wash import WASHComponent
from climate_registry_shared.schemas.projects import WASHComponentData


@dataclass(frozen=True)
class RelationSet:
    """One many-to-many set between projects and a reference table."""

    ids_field: str  # id-list attribute on payloads and views
    entities_field: str  # hydrated list attribute on ProjectDetail
    link_model: type[SQLModel]
    entity_model: type[SQLModel]
    key: str  # shared column name, e.g. agency_id

    @property
    def link_key(self):
        return getattr(self.link_model, self.key)

    @property
    def entity_key(self):
        return getattr(self.entity_model, self.key)


RELATION_SETS: tuple[RelationSet, ...] = (
    RelationSet("agency_ids", "agencies", ProjectAgency, Agency, "agency_id"),
    RelationSet("location_ids", "locations", ProjectLocation, Location, "location_id"),
    RelationSet(
        "funding_source_ids",
        "funding_sources",
        ProjectFundingSource,
        FundingSource,
        "funding_source_id",
    ),
    RelationSet("focal_area_ids", "focal_areas", ProjectFocalArea, FocalArea, "focal_area_id"),
)


def unique_ids(ids: Iterable[int]) -> list[int]:
    """Drop repeated ids, keeping first-seen order."""
    return list(dict.fromkeys(ids))


# ---------------------------------------------------------------------------
# Junction rows
# ---------------------------------------------------------------------------


async def insert_links(
    session: AsyncSession,
    project_id: uuid.UUID,
    relation: RelationSet,
    ids: Iterable[int],
) -> int:
    rows = [
        relation.link_model(project_id=project_id, **{relation.key: other_id})
        for other_id in unique_ids(ids)
    ]
    if rows:
        session.add_all(rows)
        await session.flush()
    return len(rows)


async def clear_links(
    session: AsyncSession, project_id: uuid.UUID, relation: RelationSet
) -> None:
    await session.execute(
        delete(relation.link_model).where(relation.link_model.project_id == project_id)
    )


async def replace_links(
    session: AsyncSession,
    project_id: uuid.UUID,
    relation: RelationSet,
    ids: Iterable[int],
) -> int:
    """Full replacement: delete every pair for the project, then reinsert."""
    await clear_links(session, project_id, relation)
    return await insert_links(session, project_id, relation, ids)


async def linked_entities(
    session: AsyncSession, project_id: uuid.UUID, relation: RelationSet
) -> list[SQLModel]:
    result = await session.execute(
        select(relation.entity_model)
        .join(relation.link_model, relation.link_key == relation.entity_key)
        .where(relation.link_model.project_id == project_id)
        .order_by(relation.entity_key)
    )
    return list(result.scalars().all())


# ---------------------------------------------------------------------------
# WASH sub-record
# ---------------------------------------------------------------------------


async def insert_wash(
    session: AsyncSession,
    project_id: uuid.UUID,
    wash: Optional[WASHComponentData],
) -> WASHComponent:
    """Insert the project's WASH row, defaulting to presence=False and zeros."""
    data = wash or WASHComponentData()
    row = WASHComponent(project_id=project_id, **data.model_dump())
    session.add(row)
    await session.flush()
    return row


async def upsert_wash(
    session: AsyncSession, project_id: uuid.UUID, wash: WASHComponentData
) -> None:
    """Insert or overwrite the WASH row keyed by project_id."""
    values = wash.model_dump()
    dialect = session.get_bind().dialect.name
    insert = pg_insert if dialect == "postgresql" else sqlite_insert

    stmt = insert(WASHComponent).values(project_id=project_id, **values)
    stmt = stmt.on_conflict_do_update(
        index_elements=["project_id"],
        set_={name: stmt.excluded[name] for name in values},
    )
    await session.execute(stmt)
