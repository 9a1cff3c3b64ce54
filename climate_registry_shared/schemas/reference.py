from typing import Optional
from pydantic import BaseModel


class AgencyRead(BaseModel):
    agency_id: int
    name: str
    type: Optional[str] = None

    model_config = {"from_attributes": True}


class LocationRead(BaseModel):
    location_id: int
    name: str
    region: Optional[str] = None

    model_config = {"from_attributes": True}


class FundingSourceRead(BaseModel):
    funding_source_id: int
    name: str
    dev_partner: Optional[str] = None
    type: Optional[str] = None
    grant_amount: Optional[float] = None
    loan_amount: Optional[float] = None
    counterpart_funding: Optional[float] = None
    non_grant_instrument: Optional[str] = None
    disbursement: Optional[float] = None

    model_config = {"from_attributes": True}


class FocalAreaRead(BaseModel):
    focal_area_id: int
    name: str

    model_config = {"from_attributes": True}
