"""
Truck request schemas.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import date

from waybill.app.domain.base import ReferenceId
from waybill.app.domain.enums import FuelType, TrailerType
from waybill.app.domain.truck import LicensePlate, Truck
from waybill.app.schemas.common import EntityCreate, EntityUpdate


class TruckCreate(EntityCreate):
    """Schema for adding a truck to the fleet. New trucks start AVAILABLE."""
    entity_type = Truck

    truck_number: str = Field(..., min_length=1, max_length=100)
    vin: str = Field(..., min_length=1, max_length=17, description="Vehicle identification number")
    make: str = Field("", max_length=100)
    model: str = Field("", max_length=100)
    year: int = Field(..., ge=1900, le=2100)
    license_plate: LicensePlate = Field(default_factory=LicensePlate)
    mileage: int = Field(0, ge=0)
    assigned_driver_id: Optional[ReferenceId] = None
    trailer_type: TrailerType = TrailerType.DRY_VAN
    capacity_tons: float = Field(0, ge=0, description="Cargo capacity in tons")
    fuel_type: FuelType = FuelType.DIESEL
    last_maintenance: Optional[date] = None


class TruckUpdate(EntityUpdate):
    """Mileage and status have their own endpoints."""
    truck_number: Optional[str] = Field(None, min_length=1, max_length=100)
    vin: Optional[str] = Field(None, min_length=1, max_length=17)
    make: Optional[str] = Field(None, max_length=100)
    model: Optional[str] = Field(None, max_length=100)
    year: Optional[int] = Field(None, ge=1900, le=2100)
    license_plate: Optional[LicensePlate] = None
    assigned_driver_id: Optional[ReferenceId] = None
    trailer_type: Optional[TrailerType] = None
    capacity_tons: Optional[float] = Field(None, ge=0)
    fuel_type: Optional[FuelType] = None
    last_maintenance: Optional[date] = None


class MileageUpdate(BaseModel):
    mileage: int = Field(..., ge=0)


class LastMaintenanceUpdate(BaseModel):
    last_maintenance: date
