"""
Trip service.

Each lifecycle operation is one read-transition-save cycle: the trip is
fetched under the caller's owner id, the matching lifecycle function is
applied, and the whole trip is written back. A rejected transition never
reaches the repository.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from waybill.app.domain import trip_lifecycle
from waybill.app.domain.driver import Driver
from waybill.app.domain.enums import TripStatus
from waybill.app.domain.records import Facility
from waybill.app.domain.trip import TimeWindow, Trip
from waybill.app.domain.truck import Truck
from waybill.app.repositories.base import Repository
from waybill.app.services.resource_service import ResourceService

# Plain-field edits that move a scheduled time without touching the actual one
SCHEDULE_CHANGES = {
    "scheduled_departure": "departure_time",
    "scheduled_arrival": "arrival_time",
}


class TripService(ResourceService[Trip]):
    entity_type = Trip

    def __init__(
        self,
        repository: Repository[Trip],
        driver_repository: Optional[Repository[Driver]] = None,
        truck_repository: Optional[Repository[Truck]] = None,
        facility_repository: Optional[Repository[Facility]] = None,
        **kwargs
    ):
        super().__init__(repository, **kwargs)
        self.driver_repository = driver_repository
        self.truck_repository = truck_repository
        self.facility_repository = facility_repository

    def _prepare_new(self, trip: Trip) -> Trip:
        # Every trip starts SCHEDULED with no observed times and no notes
        return trip.without_snapshots().model_copy(update={
            "status": TripStatus.SCHEDULED,
            "departure_time": TimeWindow(scheduled=trip.departure_time.scheduled),
            "arrival_time": TimeWindow(scheduled=trip.arrival_time.scheduled),
            "notes": [],
        })

    def _apply_changes(self, trip: Trip, changes: Dict[str, Any]) -> Trip:
        changes = dict(changes)
        for key, window in SCHEDULE_CHANGES.items():
            scheduled = changes.pop(key, None)
            if scheduled is not None:
                current = getattr(trip, window)
                changes[window] = TimeWindow(scheduled=scheduled, actual=current.actual).model_dump()
        return super()._apply_changes(trip, changes)

    async def begin_trip(self, trip_id: str, owner_id: str, departure_actual: datetime) -> Trip:
        """SCHEDULED -> IN_TRANSIT."""
        return await self._mutate(
            trip_id, owner_id,
            lambda trip: trip_lifecycle.begin_trip(trip, departure_actual, now=self.clock()),
            "begin"
        )

    async def complete_successfully(self, trip_id: str, owner_id: str, arrival_actual: datetime) -> Trip:
        """IN_TRANSIT -> COMPLETED."""
        return await self._mutate(
            trip_id, owner_id,
            lambda trip: trip_lifecycle.complete_successfully(trip, arrival_actual, now=self.clock()),
            "complete"
        )

    async def complete_unsuccessfully(self, trip_id: str, owner_id: str, arrival_actual: datetime) -> Trip:
        """IN_TRANSIT -> FAILED_DELIVERY."""
        return await self._mutate(
            trip_id, owner_id,
            lambda trip: trip_lifecycle.complete_unsuccessfully(trip, arrival_actual, now=self.clock()),
            "fail"
        )

    async def cancel(self, trip_id: str, owner_id: str) -> Trip:
        """SCHEDULED -> CANCELED."""
        return await self._mutate(
            trip_id, owner_id,
            lambda trip: trip_lifecycle.cancel(trip, now=self.clock()),
            "cancel"
        )

    async def add_note(self, trip_id: str, owner_id: str, content: str) -> Trip:
        # Validate before the read so bad input costs no round trip
        content = trip_lifecycle.validate_note(content)
        return await self._mutate(
            trip_id, owner_id,
            lambda trip: trip_lifecycle.add_note(trip, content, now=self.clock()),
            "note"
        )

    async def get_with_associations(self, trip_id: str, owner_id: str) -> Trip:
        """
        Fetch a trip with driver, truck and facility snapshots filled in.

        Associated records are looked up under the same owner id. A reference
        that does not resolve leaves its snapshot empty.
        """
        trip = await self.get_by_id(trip_id, owner_id)
        lookups = (
            ("driver", trip.driver_id, self.driver_repository),
            ("truck", trip.truck_id, self.truck_repository),
            ("start_facility", trip.start_facility_id, self.facility_repository),
            ("end_facility", trip.end_facility_id, self.facility_repository),
        )
        snapshots = {}
        for field, reference, repository in lookups:
            if reference and repository is not None:
                snapshots[field] = await repository.find_by_id(reference, owner_id)
        return trip.model_copy(update=snapshots)
