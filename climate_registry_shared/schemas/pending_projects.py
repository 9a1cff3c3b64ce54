from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from .projects import ProjectBase, ProjectCreate, WASHComponentData


class PendingProjectSubmit(ProjectCreate):
    """Public submission. Id-lists are stored as given, unchecked."""

    submitter_email: str = Field(min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")


class PendingProjectRead(ProjectBase):
    pending_id: UUID
    submitter_email: str
    submitted_at: datetime
    agency_ids: List[int] = Field(default_factory=list)
    location_ids: List[int] = Field(default_factory=list)
    funding_source_ids: List[int] = Field(default_factory=list)
    focal_area_ids: List[int] = Field(default_factory=list)
    wash_component: Optional[WASHComponentData] = None

    model_config = {"from_attributes": True}
