"""
Pending submission service: public intake staging area.

Submissions keep their relationship ids as plain JSON lists; nothing is
checked against the reference tables until an administrator approves.
"""

from __future__ import annotations

import uuid
from typing import Optional

import structlog
from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from climate_registry.core.database import Database
from climate_registry.models.pending_project import PendingProject
from climate_registry.services.projects import project_column_values
from climate_registry.services.relations import RELATION_SETS
from climate_registry_shared.schemas.pending_projects import PendingProjectSubmit

log = structlog.get_logger()


async def insert_pending(session: AsyncSession, data: PendingProjectSubmit) -> PendingProject:
    pending = PendingProject(
        **project_column_values(data),
        submitter_email=data.submitter_email,
        wash_component=data.wash_component.model_dump() if data.wash_component else None,
        **{r.ids_field: list(getattr(data, r.ids_field)) for r in RELATION_SETS},
    )
    session.add(pending)
    await session.flush()
    return pending


async def delete_pending(session: AsyncSession, pending_id: uuid.UUID) -> bool:
    result = await session.execute(
        delete(PendingProject).where(PendingProject.pending_id == pending_id)
    )
    return result.rowcount == 1


class PendingProjectRepository:
    """Staging store for externally submitted projects."""

    def __init__(self, db: Database):
        self._db = db

    async def submit(self, data: PendingProjectSubmit) -> uuid.UUID:
        with structlog.contextvars.bound_contextvars(operation="pending_project.submit"):
            async with self._db.transaction() as session:
                pending = await insert_pending(session, data)

        log.info(
            "pending_project.submitted",
            pending_id=str(pending.pending_id),
            submitter=data.submitter_email,
            has_wash=data.wash_component is not None,
        )
        return pending.pending_id

    async def list(self) -> list[PendingProject]:
        """All submissions, most recent first."""
        async with self._db.session() as session:
            result = await session.execute(
                select(PendingProject).order_by(
                    PendingProject.submitted_at.desc(), PendingProject.pending_id
                )
            )
            return list(result.scalars().all())

    async def get(self, pending_id: uuid.UUID) -> Optional[PendingProject]:
        async with self._db.session() as session:
            return await session.get(PendingProject, pending_id)

    async def count(self) -> int:
        async with self._db.session() as session:
            result = await session.execute(select(func.count()).select_from(PendingProject))
            return result.scalar_one()

    async def reject(self, pending_id: uuid.UUID) -> bool:
        """Discard a submission. False when there was nothing to delete."""
        with structlog.contextvars.bound_contextvars(
            operation="pending_project.reject", pending_id=str(pending_id)
        ):
            async with self._db.transaction() as session:
                deleted = await delete_pending(session, pending_id)

        if deleted:
            log.info("pending_project.rejected", pending_id=str(pending_id))
        return deleted
