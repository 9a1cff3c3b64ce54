"""
Approval workflow for pending submissions.

States: pending -> approved | rejected, both terminal. Approval materializes
the submission through the project write path and deletes the staging row
in the same transaction; any failure leaves the submission pending.
"""

from __future__ import annotations

import uuid

import structlog

from climate_registry.core.database import Database
from climate_registry.core.exceptions import NotFoundError
from climate_registry.models.pending_project import PendingProject
from climate_registry.models.project import Project
from climate_registry.services.pending_projects import delete_pending
from climate_registry.services.projects import insert_project
from climate_registry_shared.schemas.projects import ProjectCreate

log = structlog.get_logger()


class ApprovalWorkflow:
    """Coordinates the pending and project stores under one transaction."""

    def __init__(self, db: Database):
        self._db = db

    async def approve(self, pending_id: uuid.UUID) -> Project:
        """Turn a submission into a registered project.

        Raises NotFoundError if the submission does not exist, including when
        a concurrent approval or rejection consumed it first. Stale reference
        ids surface as IntegrityError; in every failure case nothing is written.
        """
        with structlog.contextvars.bound_contextvars(
            operation="pending_project.approve", pending_id=str(pending_id)
        ):
            async with self._db.transaction() as session:
                pending = await session.get(PendingProject, pending_id, with_for_update=True)
                if pending is None:
                    raise NotFoundError("PendingProject", pending_id)

                # WASH is always written: the submitted payload, or the zero default.
                data = ProjectCreate.model_validate(pending, from_attributes=True)
                project = await insert_project(session, data)

                if not await delete_pending(session, pending_id):
                    raise NotFoundError("PendingProject", pending_id)

        log.info(
            "pending_project.approved",
            pending_id=str(pending_id),
            project_id=str(project.project_id),
        )
        return project

    async def reject(self, pending_id: uuid.UUID) -> None:
        """Discard a submission; raises NotFoundError if it does not exist."""
        with structlog.contextvars.bound_contextvars(
            operation="pending_project.reject", pending_id=str(pending_id)
        ):
            async with self._db.transaction() as session:
                if not await delete_pending(session, pending_id):
                    raise NotFoundError("PendingProject", pending_id)

        log.info("pending_project.rejected", pending_id=str(pending_id))
