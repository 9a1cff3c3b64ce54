"""Project relationship join tables. Rows live and die with their project."""

import uuid

from sqlmodel import Field, SQLModel


class ProjectAgency(SQLModel, table=True):
    __tablename__ = "project_agencies"

    project_id: uuid.UUID = Field(
        foreign_key="projects.project_id", ondelete="CASCADE", primary_key=True
    )
    agency_id: int = Field(foreign_key="agencies.agency_id", primary_key=True, index=True)


class ProjectLocation(SQLModel, table=True):
    __tablename__ = "project_locations"

    project_id: uuid.UUID = Field(
        foreign_key="projects.project_id", ondelete="CASCADE", primary_key=True
    )
    location_id: int = Field(foreign_key="locations.location_id", primary_key=True, index=True)


class ProjectFundingSource(SQLModel, table=True):
    __tablename__ = "project_funding_sources"

    project_id: uuid.UUID = Field(
        foreign_key="projects.project_id", ondelete="CASCADE", primary_key=True
    )
    funding_source_id: int = Field(
        foreign_key="funding_sources.funding_source_id", primary_key=True, index=True
    )


class ProjectFocalArea(SQLModel, table=True):
    __tablename__ = "project_focal_areas"

    project_id: uuid.UUID = Field(
        foreign_key="projects.project_id", ondelete="CASCADE", primary_key=True
    )
    focal_area_id: int = Field(foreign_key="focal_areas.focal_area_id", primary_key=True, index=True)
