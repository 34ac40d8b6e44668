"""
Fuel log, maintenance log and incident report request schemas.
"""

from pydantic import Field
from typing import Optional
from datetime import date as date_type

from waybill.app.domain.base import ReferenceId
from waybill.app.domain.enums import IncidentType
from waybill.app.domain.records import FuelLog, IncidentReport, MaintenanceLog
from waybill.app.schemas.common import EntityCreate, EntityUpdate


class FuelLogCreate(EntityCreate):
    """Schema for recording a fuel purchase. Total cost defaults to gallons x price."""
    entity_type = FuelLog

    truck_id: ReferenceId
    driver_id: Optional[ReferenceId] = None
    date: date_type
    gallons_purchased: float = Field(..., gt=0)
    price_per_gallon: float = Field(..., ge=0)
    total_cost: Optional[float] = Field(None, ge=0)
    location: str = Field("", max_length=255)
    odometer_reading: int = Field(0, ge=0)


class FuelLogUpdate(EntityUpdate):
    truck_id: Optional[ReferenceId] = None
    driver_id: Optional[ReferenceId] = None
    date: Optional[date_type] = None
    gallons_purchased: Optional[float] = Field(None, gt=0)
    price_per_gallon: Optional[float] = Field(None, ge=0)
    total_cost: Optional[float] = Field(None, ge=0)
    location: Optional[str] = Field(None, max_length=255)
    odometer_reading: Optional[int] = Field(None, ge=0)


class MaintenanceLogCreate(EntityCreate):
    entity_type = MaintenanceLog

    truck_id: ReferenceId
    date: date_type
    service_type: str = Field(..., min_length=1, max_length=100)
    cost: float = Field(0, ge=0)
    notes: str = ""
    mechanic: str = Field("", max_length=255)
    location: str = Field("", max_length=255)


class MaintenanceLogUpdate(EntityUpdate):
    truck_id: Optional[ReferenceId] = None
    date: Optional[date_type] = None
    service_type: Optional[str] = Field(None, min_length=1, max_length=100)
    cost: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None
    mechanic: Optional[str] = Field(None, max_length=255)
    location: Optional[str] = Field(None, max_length=255)


class IncidentReportCreate(EntityCreate):
    entity_type = IncidentReport

    trip_id: Optional[ReferenceId] = None
    truck_id: Optional[ReferenceId] = None
    driver_id: Optional[ReferenceId] = None
    type: IncidentType
    description: str = ""
    date: date_type
    location: str = Field("", max_length=255)
    damage_estimate: float = Field(0, ge=0)


class IncidentReportUpdate(EntityUpdate):
    trip_id: Optional[ReferenceId] = None
    truck_id: Optional[ReferenceId] = None
    driver_id: Optional[ReferenceId] = None
    type: Optional[IncidentType] = None
    description: Optional[str] = None
    date: Optional[date_type] = None
    location: Optional[str] = Field(None, max_length=255)
    damage_estimate: Optional[float] = Field(None, ge=0)
