"""
Trip request schemas.

Responses use the Trip domain model directly.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from waybill.app.domain.base import ReferenceId
from waybill.app.domain.trip import Cargo, TimeWindow, Trip
from waybill.app.schemas.common import EntityCreate, EntityUpdate


class TripCreate(EntityCreate):
    """Schema for scheduling a new trip."""
    trip_number: str = Field("", max_length=100)

    driver_id: Optional[ReferenceId] = None
    truck_id: Optional[ReferenceId] = None
    start_facility_id: Optional[ReferenceId] = None
    end_facility_id: Optional[ReferenceId] = None

    scheduled_departure: datetime
    scheduled_arrival: datetime

    cargo: Cargo = Field(default_factory=Cargo)
    fuel_usage_gallons: float = Field(0, ge=0)
    distance_miles: int = Field(0, ge=0)

    def to_entity(self, owner_id: str) -> Trip:
        values = self.model_dump(exclude={"scheduled_departure", "scheduled_arrival"})
        return Trip(
            owner_id=owner_id,
            departure_time=TimeWindow(scheduled=self.scheduled_departure),
            arrival_time=TimeWindow(scheduled=self.scheduled_arrival),
            **values
        )


class TripUpdate(EntityUpdate):
    """Schema for editing a trip's plain fields. Status has its own endpoints."""
    trip_number: Optional[str] = Field(None, max_length=100)
    driver_id: Optional[ReferenceId] = None
    truck_id: Optional[ReferenceId] = None
    start_facility_id: Optional[ReferenceId] = None
    end_facility_id: Optional[ReferenceId] = None
    scheduled_departure: Optional[datetime] = None
    scheduled_arrival: Optional[datetime] = None
    cargo: Optional[Cargo] = None
    fuel_usage_gallons: Optional[float] = Field(None, ge=0)
    distance_miles: Optional[int] = Field(None, ge=0)


class BeginTripRequest(BaseModel):
    departure_time: datetime = Field(..., description="Actual departure time")


class ArrivalRequest(BaseModel):
    """Body for both completing and failing a delivery."""
    arrival_time: datetime = Field(..., description="Actual arrival time")


class AddNoteRequest(BaseModel):
    content: str
