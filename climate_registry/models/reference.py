"""Reference entities a project links to (CRUD lives outside the core)."""

from typing import Optional

from sqlmodel import Field, SQLModel


class Agency(SQLModel, table=True):
    __tablename__ = "agencies"

    agency_id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    type: Optional[str] = None  # Implementing | Executing | Accredited


class Location(SQLModel, table=True):
    __tablename__ = "locations"

    location_id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    region: Optional[str] = None


class FundingSource(SQLModel, table=True):
    __tablename__ = "funding_sources"

    funding_source_id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    dev_partner: Optional[str] = None
    type: Optional[str] = None
    grant_amount: Optional[float] = None
    loan_amount: Optional[float] = None
    counterpart_funding: Optional[float] = None
    non_grant_instrument: Optional[str] = None
    disbursement: Optional[float] = None


class FocalArea(SQLModel, table=True):
    __tablename__ = "focal_areas"

    focal_area_id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
