"""Project model and the column set it shares with pending submissions."""

from datetime import date
from typing import Optional
import uuid

import sqlalchemy as sa
from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from .base import TimestampMixin


class ProjectFields(SQLModel):
    """Columns common to ``projects`` and ``pending_projects``."""

    title: str = Field(nullable=False)
    type: str = Field(nullable=False)  # Adaptation | Mitigation | Cross-cutting
    sector: Optional[str] = None
    division: Optional[str] = None
    status: Optional[str] = None  # Planning | Active | Implemented ...
    approval_fy: Optional[int] = None
    beginning: Optional[date] = None
    closing: Optional[date] = None
    total_cost_usd: Optional[float] = None
    gef_grant: Optional[float] = None
    cofinancing: Optional[float] = None
    disbursement: Optional[float] = None
    wash_finance: bool = Field(
        default=False, nullable=False, sa_column_kwargs={"server_default": sa.false()}
    )
    wash_finance_percent: Optional[float] = None
    beneficiaries: Optional[str] = None
    objectives: Optional[str] = None


PROJECT_FIELD_NAMES = tuple(ProjectFields.model_fields)


class Project(ProjectFields, TimestampMixin, table=True):
    __tablename__ = "projects"
    __table_args__ = (
        CheckConstraint("total_cost_usd >= 0", name="ck_projects_total_cost_non_negative"),
        CheckConstraint("gef_grant >= 0", name="ck_projects_grant_non_negative"),
        CheckConstraint("cofinancing >= 0", name="ck_projects_cofinancing_non_negative"),
        CheckConstraint("disbursement >= 0", name="ck_projects_disbursement_non_negative"),
        CheckConstraint("beginning <= closing", name="ck_projects_dates_ordered"),
        CheckConstraint(
            "type IN ('Adaptation', 'Mitigation', 'Cross-cutting')",
            name="ck_projects_type",
        ),
    )

    project_id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        nullable=False,
    )
