"""
Driver request schemas.
"""

from pydantic import Field
from typing import Optional
from datetime import date

from waybill.app.domain.base import ReferenceId
from waybill.app.domain.driver import Address, Driver
from waybill.app.schemas.common import EntityCreate, EntityUpdate


class DriverCreate(EntityCreate):
    """Schema for hiring a driver. Employment starts ACTIVE."""
    entity_type = Driver

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    dob: Optional[date] = None
    license_number: str = Field(..., min_length=1, max_length=50)
    license_state: str = Field(..., min_length=2, max_length=2)
    license_expiration: Optional[date] = None
    phone: str = Field("", max_length=50)
    email: str = Field("", max_length=255)
    address: Address = Field(default_factory=Address)
    assigned_truck_id: Optional[ReferenceId] = None


class DriverUpdate(EntityUpdate):
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    dob: Optional[date] = None
    license_number: Optional[str] = Field(None, min_length=1, max_length=50)
    license_state: Optional[str] = Field(None, min_length=2, max_length=2)
    license_expiration: Optional[date] = None
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[str] = Field(None, max_length=255)
    address: Optional[Address] = None
    assigned_truck_id: Optional[ReferenceId] = None
