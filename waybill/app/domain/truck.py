"""
Truck entity.
"""

from datetime import date
from typing import ClassVar, FrozenSet, Optional
from pydantic import BaseModel, Field

from waybill.app.domain.base import OwnedEntity, ReferenceId
from waybill.app.domain.enums import FuelType, TrailerType, TruckStatus


class LicensePlate(BaseModel):
    number: str = Field("", max_length=20)
    state: str = Field("", max_length=2)


class Truck(OwnedEntity):
    """
    A truck in the owner's fleet.

    `status` belongs to the truck lifecycle operations; `mileage` only moves
    forward.
    """
    truck_number: str = Field(..., max_length=100)
    vin: str = Field(..., min_length=1, max_length=17)
    make: str = Field("", max_length=100)
    model: str = Field("", max_length=100)
    year: int = Field(..., ge=1900, le=2100)
    license_plate: LicensePlate = Field(default_factory=LicensePlate)
    mileage: int = Field(0, ge=0)
    status: TruckStatus = TruckStatus.AVAILABLE
    assigned_driver_id: Optional[ReferenceId] = None
    trailer_type: TrailerType = TrailerType.DRY_VAN
    capacity_tons: float = Field(0, ge=0)
    fuel_type: FuelType = FuelType.DIESEL
    last_maintenance: Optional[date] = None

    protected_fields: ClassVar[FrozenSet[str]] = OwnedEntity.protected_fields | {"status", "mileage"}
