"""
Facility request schemas.
"""

from pydantic import BaseModel, Field
from typing import List, Optional

from waybill.app.domain.driver import Address
from waybill.app.domain.enums import FacilityService
from waybill.app.domain.records import ContactInfo, Facility
from waybill.app.schemas.common import EntityCreate, EntityUpdate


class FacilityCreate(EntityCreate):
    entity_type = Facility

    facility_number: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=255)
    type: str = Field("", max_length=100, description="Facility type (e.g., Warehouse, Terminal)")
    address: Address = Field(default_factory=Address)
    contact_info: ContactInfo = Field(default_factory=ContactInfo)
    parking_capacity: int = Field(0, ge=0)
    services_available: List[FacilityService] = Field(default_factory=list)


class FacilityUpdate(EntityUpdate):
    facility_number: Optional[str] = Field(None, min_length=1, max_length=100)
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[str] = Field(None, max_length=100)
    address: Optional[Address] = None
    contact_info: Optional[ContactInfo] = None
    parking_capacity: Optional[int] = Field(None, ge=0)
    services_available: Optional[List[FacilityService]] = None


class ServicesUpdate(BaseModel):
    """Full replacement of the services a facility offers."""
    services: List[FacilityService]
