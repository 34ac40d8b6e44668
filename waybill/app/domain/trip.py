"""
Trip entity and its embedded value objects.

A trip is created in SCHEDULED and only changes status through the
operations in waybill.app.domain.trip_lifecycle.
"""

from datetime import datetime
from typing import ClassVar, FrozenSet, List, Optional
from pydantic import BaseModel, Field

from waybill.app.domain.base import OwnedEntity, ReferenceId
from waybill.app.domain.driver import Driver
from waybill.app.domain.enums import TripStatus
from waybill.app.domain.records import Facility
from waybill.app.domain.truck import Truck

MAX_NOTE_LENGTH = 1000

# Statuses in which each actual timestamp must be present
DEPARTED_STATUSES = frozenset({TripStatus.IN_TRANSIT, TripStatus.COMPLETED, TripStatus.FAILED_DELIVERY})
ARRIVED_STATUSES = frozenset({TripStatus.COMPLETED, TripStatus.FAILED_DELIVERY})


class TimeWindow(BaseModel):
    """Planned time and, once observed, the actual one."""
    scheduled: datetime
    actual: Optional[datetime] = None


class Cargo(BaseModel):
    description: str = Field("", max_length=500)
    weight: float = Field(0, ge=0)
    hazmat: bool = False


class TripNote(BaseModel):
    timestamp: datetime
    content: str


class Trip(OwnedEntity):
    """
    Trip model.

    Associations (driver, truck, start/end facility) are references by id.
    The matching snapshot fields are filled in on request for display and are
    never persisted.
    """
    trip_number: str = Field("", max_length=100)

    driver_id: Optional[ReferenceId] = None
    truck_id: Optional[ReferenceId] = None
    start_facility_id: Optional[ReferenceId] = None
    end_facility_id: Optional[ReferenceId] = None

    driver: Optional[Driver] = None
    truck: Optional[Truck] = None
    start_facility: Optional[Facility] = None
    end_facility: Optional[Facility] = None

    departure_time: TimeWindow
    arrival_time: TimeWindow
    status: TripStatus = TripStatus.SCHEDULED

    cargo: Cargo = Field(default_factory=Cargo)
    fuel_usage_gallons: float = Field(0, ge=0)
    distance_miles: int = Field(0, ge=0)
    notes: List[TripNote] = Field(default_factory=list)

    protected_fields: ClassVar[FrozenSet[str]] = OwnedEntity.protected_fields | {
        "status", "notes", "departure_time", "arrival_time",
        "driver", "truck", "start_facility", "end_facility",
    }

    snapshot_fields: ClassVar[FrozenSet[str]] = frozenset({"driver", "truck", "start_facility", "end_facility"})

    def is_consistent(self) -> bool:
        """Check that the actual timestamps agree with the status."""
        departed = self.departure_time.actual is not None
        arrived = self.arrival_time.actual is not None
        return (
            departed == (self.status in DEPARTED_STATUSES)
            and arrived == (self.status in ARRIVED_STATUSES)
        )

    def without_snapshots(self) -> "Trip":
        return self.model_copy(update={name: None for name in self.snapshot_fields})
