from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from .common import ProjectType
from .reference import AgencyRead, FocalAreaRead, FundingSourceRead, LocationRead


def check_dates(beginning: Optional[date], closing: Optional[date]) -> None:
    if beginning is not None and closing is not None and beginning > closing:
        raise ValueError(
            f"beginning ({beginning.isoformat()}) must not be after closing ({closing.isoformat()})"
        )


class WASHComponentData(BaseModel):
    """Water/sanitation/hygiene breakdown. Percentages need not sum to 100."""

    presence: bool = False
    water_supply_percent: float = Field(default=0, ge=0, le=100)
    sanitation_percent: float = Field(default=0, ge=0, le=100)
    public_admin_percent: float = Field(default=0, ge=0, le=100)

    model_config = {"from_attributes": True}

    @model_validator(mode="after")
    def _zero_without_presence(self) -> "WASHComponentData":
        if not self.presence:
            self.water_supply_percent = 0
            self.sanitation_percent = 0
            self.public_admin_percent = 0
        return self


class ProjectBase(BaseModel):
    title: str = Field(min_length=1)
    type: ProjectType
    sector: Optional[str] = None
    division: Optional[str] = None
    status: Optional[str] = None  # Planning | Active | Implemented ...
    approval_fy: Optional[int] = None
    beginning: Optional[date] = None
    closing: Optional[date] = None
    total_cost_usd: Optional[float] = Field(default=None, ge=0)
    gef_grant: Optional[float] = Field(default=None, ge=0)
    cofinancing: Optional[float] = Field(default=None, ge=0)
    disbursement: Optional[float] = Field(default=None, ge=0)
    wash_finance: bool = False
    wash_finance_percent: Optional[float] = Field(default=None, ge=0, le=100)
    beneficiaries: Optional[str] = None
    objectives: Optional[str] = None

    @model_validator(mode="after")
    def _dates_ordered(self):
        check_dates(self.beginning, self.closing)
        return self


class ProjectCreate(ProjectBase):
    agency_ids: List[int] = Field(default_factory=list)
    location_ids: List[int] = Field(default_factory=list)
    funding_source_ids: List[int] = Field(default_factory=list)
    focal_area_ids: List[int] = Field(default_factory=list)
    wash_component: Optional[WASHComponentData] = None


# Patch fields that map to NOT NULL columns or must be replaced, never nulled.
_NON_NULLABLE_PATCH_FIELDS = (
    "title",
    "type",
    "wash_finance",
    "agency_ids",
    "location_ids",
    "funding_source_ids",
    "focal_area_ids",
    "wash_component",
)


class ProjectPatch(BaseModel):
    """Partial update. Only fields present in ``model_fields_set`` are written.

    A relationship id-list, when supplied, replaces that set entirely
    (``[]`` clears it). ``wash_component``, when supplied, is upserted.
    """

    title: Optional[str] = Field(default=None, min_length=1)
    type: Optional[ProjectType] = None
    sector: Optional[str] = None
    division: Optional[str] = None
    status: Optional[str] = None
    approval_fy: Optional[int] = None
    beginning: Optional[date] = None
    closing: Optional[date] = None
    total_cost_usd: Optional[float] = Field(default=None, ge=0)
    gef_grant: Optional[float] = Field(default=None, ge=0)
    cofinancing: Optional[float] = Field(default=None, ge=0)
    disbursement: Optional[float] = Field(default=None, ge=0)
    wash_finance: Optional[bool] = None
    wash_finance_percent: Optional[float] = Field(default=None, ge=0, le=100)
    beneficiaries: Optional[str] = None
    objectives: Optional[str] = None

    agency_ids: Optional[List[int]] = None
    location_ids: Optional[List[int]] = None
    funding_source_ids: Optional[List[int]] = None
    focal_area_ids: Optional[List[int]] = None
    wash_component: Optional[WASHComponentData] = None

    @model_validator(mode="after")
    def _check_supplied(self):
        for name in _NON_NULLABLE_PATCH_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        check_dates(self.beginning, self.closing)
        return self


class ProjectRead(ProjectBase):
    project_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProjectListItem(ProjectRead):
    wash_component: WASHComponentData = Field(default_factory=WASHComponentData)


class ProjectDetail(ProjectListItem):
    """Fully resolved project: raw id-lists for edit forms, entities for display."""

    agency_ids: List[int] = Field(default_factory=list)
    location_ids: List[int] = Field(default_factory=list)
    funding_source_ids: List[int] = Field(default_factory=list)
    focal_area_ids: List[int] = Field(default_factory=list)

    agencies: List[AgencyRead] = Field(default_factory=list)
    locations: List[LocationRead] = Field(default_factory=list)
    funding_sources: List[FundingSourceRead] = Field(default_factory=list)
    focal_areas: List[FocalAreaRead] = Field(default_factory=list)
