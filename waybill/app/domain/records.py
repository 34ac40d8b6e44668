"""
Plain tenant-owned records: facilities and the fuel, maintenance and
incident logs. None of them has a lifecycle; they are created, edited,
deleted and listed through the generic resource service.
"""

from datetime import date as date_type
from typing import List, Optional
from pydantic import BaseModel, Field, model_validator

from waybill.app.domain.base import OwnedEntity, ReferenceId
from waybill.app.domain.driver import Address
from waybill.app.domain.enums import FacilityService, IncidentType


class ContactInfo(BaseModel):
    phone: str = Field("", max_length=50)
    email: str = Field("", max_length=255)


class Facility(OwnedEntity):
    facility_number: str = Field(..., max_length=100)
    name: str = Field(..., max_length=255)
    type: str = Field("", max_length=100)
    address: Address = Field(default_factory=Address)
    contact_info: ContactInfo = Field(default_factory=ContactInfo)
    parking_capacity: int = Field(0, ge=0)
    services_available: List[FacilityService] = Field(default_factory=list)


class FuelLog(OwnedEntity):
    truck_id: ReferenceId
    driver_id: Optional[ReferenceId] = None
    date: date_type
    gallons_purchased: float = Field(..., gt=0)
    price_per_gallon: float = Field(..., ge=0)
    total_cost: Optional[float] = None
    location: str = Field("", max_length=255)
    odometer_reading: int = Field(0, ge=0)

    @model_validator(mode="after")
    def _fill_total_cost(self):
        # Receipts without a total are priced from the pump figures
        if self.total_cost is None:
            self.total_cost = round(self.gallons_purchased * self.price_per_gallon, 2)
        return self


class MaintenanceLog(OwnedEntity):
    truck_id: ReferenceId
    date: date_type
    service_type: str = Field(..., max_length=100)
    cost: float = Field(0, ge=0)
    notes: str = ""
    mechanic: str = Field("", max_length=255)
    location: str = Field("", max_length=255)


class IncidentReport(OwnedEntity):
    trip_id: Optional[ReferenceId] = None
    truck_id: Optional[ReferenceId] = None
    driver_id: Optional[ReferenceId] = None
    type: IncidentType
    description: str = ""
    date: date_type
    location: str = Field("", max_length=255)
    damage_estimate: float = Field(0, ge=0)
