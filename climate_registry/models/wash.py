"""WASH (water, sanitation, hygiene) sub-record, exactly one per project."""

from typing import Optional
import uuid

import sqlalchemy as sa
from sqlmodel import Field, SQLModel


class WASHComponent(SQLModel, table=True):
    __tablename__ = "wash_components"

    wash_id: Optional[int] = Field(default=None, primary_key=True)
    project_id: uuid.UUID = Field(
        foreign_key="projects.project_id",
        ondelete="CASCADE",
        unique=True,
        nullable=False,
    )
    presence: bool = Field(
        default=False, nullable=False, sa_column_kwargs={"server_default": sa.false()}
    )
    water_supply_percent: float = Field(
        default=0, nullable=False, sa_column_kwargs={"server_default": "0"}
    )
    sanitation_percent: float = Field(
        default=0, nullable=False, sa_column_kwargs={"server_default": "0"}
    )
    public_admin_percent: float = Field(
        default=0, nullable=False, sa_column_kwargs={"server_default": "0"}
    )
