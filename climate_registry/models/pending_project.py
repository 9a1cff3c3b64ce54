"""Pending project submission: a staging row with no referential links."""

from datetime import datetime, timezone
from typing import List, Optional
import uuid

import sqlalchemy as sa
from sqlmodel import Field

from .base import json_type
from .project import ProjectFields


class PendingProject(ProjectFields, table=True):
    __tablename__ = "pending_projects"

    pending_id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        nullable=False,
    )
    submitter_email: str = Field(nullable=False)
    submitted_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
        sa_column_kwargs={"server_default": sa.func.now()},
        sa_type=sa.DateTime(timezone=True),
    )
    # Unvalidated id snapshots; junction rows are only written on approval.
    agency_ids: List[int] = Field(
        default_factory=list,
        sa_type=json_type(),
        nullable=False,
        sa_column_kwargs={"server_default": "[]"},
    )
    location_ids: List[int] = Field(
        default_factory=list,
        sa_type=json_type(),
        nullable=False,
        sa_column_kwargs={"server_default": "[]"},
    )
    funding_source_ids: List[int] = Field(
        default_factory=list,
        sa_type=json_type(),
        nullable=False,
        sa_column_kwargs={"server_default": "[]"},
    )
    focal_area_ids: List[int] = Field(
        default_factory=list,
        sa_type=json_type(),
        nullable=False,
        sa_column_kwargs={"server_default": "[]"},
    )
    wash_component: Optional[dict] = Field(default=None, sa_type=json_type())
