"""Registry schema: reference tables, projects, WASH, junctions, pending submissions.

Revision ID: 0001_registry_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "0001_registry_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# (table, column, referenced table)
JUNCTIONS = [
    ("project_agencies", "agency_id", "agencies"),
    ("project_locations", "location_id", "locations"),
    ("project_funding_sources", "funding_source_id", "funding_sources"),
    ("project_focal_areas", "focal_area_id", "focal_areas"),
]


def _project_columns() -> list[sa.Column]:
    """Columns shared by projects and pending_projects."""
    return [
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("type", sa.Text(), nullable=False),
        sa.Column("sector", sa.Text(), nullable=True),
        sa.Column("division", sa.Text(), nullable=True),
        sa.Column("status", sa.Text(), nullable=True),
        sa.Column("approval_fy", sa.Integer(), nullable=True),
        sa.Column("beginning", sa.Date(), nullable=True),
        sa.Column("closing", sa.Date(), nullable=True),
        sa.Column("total_cost_usd", sa.Float(), nullable=True),
        sa.Column("gef_grant", sa.Float(), nullable=True),
        sa.Column("cofinancing", sa.Float(), nullable=True),
        sa.Column("disbursement", sa.Float(), nullable=True),
        sa.Column("wash_finance", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("wash_finance_percent", sa.Float(), nullable=True),
        sa.Column("beneficiaries", sa.Text(), nullable=True),
        sa.Column("objectives", sa.Text(), nullable=True),
    ]


def upgrade() -> None:
    # -----------------------------------------------------------------------
    # 1. Reference tables
    # -----------------------------------------------------------------------
    op.create_table(
        "agencies",
        sa.Column("agency_id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("type", sa.Text(), nullable=True),
    )
    op.create_table(
        "locations",
        sa.Column("location_id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("region", sa.Text(), nullable=True),
    )
    op.create_table(
        "funding_sources",
        sa.Column("funding_source_id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("dev_partner", sa.Text(), nullable=True),
        sa.Column("type", sa.Text(), nullable=True),
        sa.Column("grant_amount", sa.Float(), nullable=True),
        sa.Column("loan_amount", sa.Float(), nullable=True),
        sa.Column("counterpart_funding", sa.Float(), nullable=True),
        sa.Column("non_grant_instrument", sa.Text(), nullable=True),
        sa.Column("disbursement", sa.Float(), nullable=True),
    )
    op.create_table(
        "focal_areas",
        sa.Column("focal_area_id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
    )

    # -----------------------------------------------------------------------
    # 2. Projects and their owned rows
    # -----------------------------------------------------------------------
    op.create_table(
        "projects",
        sa.Column("project_id", postgresql.UUID(as_uuid=True), primary_key=True),
        *_project_columns(),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.CheckConstraint("total_cost_usd >= 0", name="ck_projects_total_cost_non_negative"),
        sa.CheckConstraint("gef_grant >= 0", name="ck_projects_grant_non_negative"),
        sa.CheckConstraint("cofinancing >= 0", name="ck_projects_cofinancing_non_negative"),
        sa.CheckConstraint("disbursement >= 0", name="ck_projects_disbursement_non_negative"),
        sa.CheckConstraint("beginning <= closing", name="ck_projects_dates_ordered"),
        sa.CheckConstraint(
            "type IN ('Adaptation', 'Mitigation', 'Cross-cutting')",
            name="ck_projects_type",
        ),
    )

    op.create_table(
        "wash_components",
        sa.Column("wash_id", sa.Integer(), primary_key=True),
        sa.Column(
            "project_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("projects.project_id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("presence", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("water_supply_percent", sa.Float(), nullable=False, server_default="0"),
        sa.Column("sanitation_percent", sa.Float(), nullable=False, server_default="0"),
        sa.Column("public_admin_percent", sa.Float(), nullable=False, server_default="0"),
    )

    for table, column, referenced in JUNCTIONS:
        op.create_table(
            table,
            sa.Column(
                "project_id",
                postgresql.UUID(as_uuid=True),
                sa.ForeignKey("projects.project_id", ondelete="CASCADE"),
                primary_key=True,
            ),
            sa.Column(
                column,
                sa.Integer(),
                sa.ForeignKey(f"{referenced}.{column}"),
                primary_key=True,
            ),
        )
        op.create_index(f"ix_{table}_{column}", table, [column])

    # -----------------------------------------------------------------------
    # 3. Pending submissions (no foreign keys by design of the intake)
    # -----------------------------------------------------------------------
    op.create_table(
        "pending_projects",
        sa.Column("pending_id", postgresql.UUID(as_uuid=True), primary_key=True),
        *_project_columns(),
        sa.Column("submitter_email", sa.Text(), nullable=False),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("agency_ids", postgresql.JSONB(), nullable=False, server_default="[]"),
        sa.Column("location_ids", postgresql.JSONB(), nullable=False, server_default="[]"),
        sa.Column("funding_source_ids", postgresql.JSONB(), nullable=False, server_default="[]"),
        sa.Column("focal_area_ids", postgresql.JSONB(), nullable=False, server_default="[]"),
        sa.Column("wash_component", postgresql.JSONB(), nullable=True),
    )
    op.create_index("ix_pending_projects_submitted_at", "pending_projects", ["submitted_at"])


def downgrade() -> None:
    op.drop_index("ix_pending_projects_submitted_at", table_name="pending_projects")
    op.drop_table("pending_projects")
    for table, column, _ in reversed(JUNCTIONS):
        op.drop_index(f"ix_{table}_{column}", table_name=table)
        op.drop_table(table)
    op.drop_table("wash_components")
    op.drop_table("projects")
    op.drop_table("focal_areas")
    op.drop_table("funding_sources")
    op.drop_table("locations")
    op.drop_table("agencies")
