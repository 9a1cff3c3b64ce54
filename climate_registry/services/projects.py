"""
Project service layer: transactional writes and composite reads.

Handles:
- Create with WASH row and all four relationship sets in one transaction
- Patch update (supplied columns only, per-set relationship replacement, WASH upsert)
- Delete (WASH and junction rows go with the project via ON DELETE CASCADE)
- Single-project view with relations hydrated, and the flat list view
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

import structlog
from pydantic import BaseModel
from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from climate_registry.core.database import Database
from climate_registry.models.project import PROJECT_FIELD_NAMES, Project
from climate_registry.models.wash import WASHComponent
from climate_registry.services.relations import (
    RELATION_SETS,
    insert_links,
    insert_wash,
    linked_entities,
    replace_links,
    upsert_wash,
)
from climate_registry_shared.schemas.common import ProjectType
from climate_registry_shared.schemas.projects import (
    ProjectCreate,
    ProjectDetail,
    ProjectListItem,
    ProjectPatch,
)

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def project_column_values(payload: BaseModel, exclude_unset: bool = False) -> dict:
    """Project table columns from a create/patch/submit payload."""
    values = payload.model_dump(include=set(PROJECT_FIELD_NAMES), exclude_unset=exclude_unset)
    if isinstance(values.get("type"), ProjectType):
        values["type"] = values["type"].value
    return values


def _with_wash(project: Project, wash: Optional[WASHComponent]) -> dict:
    data = project.model_dump()
    data["wash_component"] = wash.model_dump() if wash is not None else {}
    return data


def _project_with_wash():
    return select(Project, WASHComponent).outerjoin(
        WASHComponent, WASHComponent.project_id == Project.project_id
    )


# ---------------------------------------------------------------------------
# Statements (caller owns the transaction)
# ---------------------------------------------------------------------------


async def insert_project(session: AsyncSession, data: ProjectCreate) -> Project:
    """Insert a project, its WASH row and its relationship rows."""
    project = Project(**project_column_values(data))
    session.add(project)
    await session.flush()  # project row must exist before its children

    await insert_wash(session, project.project_id, data.wash_component)
    for relation in RELATION_SETS:
        await insert_links(
            session, project.project_id, relation, getattr(data, relation.ids_field)
        )
    return project


async def patch_project(
    session: AsyncSession, project_id: uuid.UUID, patch: ProjectPatch
) -> Optional[Project]:
    """Apply a patch; returns None (and writes nothing) if the project is missing."""
    project = await session.get(Project, project_id, with_for_update=True)
    if project is None:
        return None

    for key, value in project_column_values(patch, exclude_unset=True).items():
        setattr(project, key, value)
    project.updated_at = datetime.now(timezone.utc)
    session.add(project)
    await session.flush()

    supplied = patch.model_fields_set
    if "wash_component" in supplied:
        await upsert_wash(session, project_id, patch.wash_component)
    for relation in RELATION_SETS:
        if relation.ids_field in supplied:
            await replace_links(session, project_id, relation, getattr(patch, relation.ids_field))
    return project


async def delete_project_row(session: AsyncSession, project_id: uuid.UUID) -> bool:
    result = await session.execute(delete(Project).where(Project.project_id == project_id))
    return result.rowcount > 0


async def load_project_detail(
    session: AsyncSession, project_id: uuid.UUID
) -> Optional[ProjectDetail]:
    result = await session.execute(
        _project_with_wash().where(Project.project_id == project_id)
    )
    row = result.first()
    if row is None:
        return None

    project, wash = row
    view = _with_wash(project, wash)
    for relation in RELATION_SETS:
        entities = await linked_entities(session, project_id, relation)
        view[relation.entities_field] = [e.model_dump() for e in entities]
        view[relation.ids_field] = [getattr(e, relation.key) for e in entities]
    return ProjectDetail.model_validate(view)


async def load_project_list(session: AsyncSession) -> list[ProjectListItem]:
    result = await session.execute(
        _project_with_wash().order_by(Project.title, Project.project_id)
    )
    return [
        ProjectListItem.model_validate(_with_wash(project, wash))
        for project, wash in result.all()
    ]


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class ProjectRepository:
    """Project persistence over an injected ``Database`` handle."""

    def __init__(self, db: Database):
        self._db = db

    async def create(self, data: ProjectCreate) -> uuid.UUID:
        """Create a project with its relations; returns only the new id."""
        with structlog.contextvars.bound_contextvars(operation="project.create"):
            async with self._db.transaction() as session:
                project = await insert_project(session, data)

        log.info(
            "project.created",
            project_id=str(project.project_id),
            type=project.type,
            agencies=len(data.agency_ids),
            locations=len(data.location_ids),
        )
        return project.project_id

    async def update(self, project_id: uuid.UUID, patch: ProjectPatch) -> Optional[Project]:
        with structlog.contextvars.bound_contextvars(
            operation="project.update", project_id=str(project_id)
        ):
            async with self._db.transaction() as session:
                project = await patch_project(session, project_id, patch)

        if project is None:
            log.info("project.update_missing", project_id=str(project_id))
            return None
        log.info(
            "project.updated",
            project_id=str(project_id),
            fields=sorted(patch.model_fields_set),
        )
        return project

    async def get(self, project_id: uuid.UUID) -> Optional[ProjectDetail]:
        async with self._db.session() as session:
            return await load_project_detail(session, project_id)

    async def list(self) -> list[ProjectListItem]:
        async with self._db.session() as session:
            return await load_project_list(session)

    async def exists(self, project_id: uuid.UUID) -> bool:
        async with self._db.session() as session:
            result = await session.execute(
                select(func.count()).select_from(Project).where(Project.project_id == project_id)
            )
            return result.scalar_one() > 0

    async def delete(self, project_id: uuid.UUID) -> bool:
        """Delete a project; True if a row was removed."""
        with structlog.contextvars.bound_contextvars(
            operation="project.delete", project_id=str(project_id)
        ):
            async with self._db.transaction() as session:
                deleted = await delete_project_row(session, project_id)

        log.info("project.deleted", project_id=str(project_id), deleted=deleted)
        return deleted
