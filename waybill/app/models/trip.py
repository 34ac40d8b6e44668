"""
Trip database model.

Time windows and cargo are flattened into columns; notes are kept as a JSON
list since they are only ever appended and read back whole.
"""

from sqlalchemy import Column, Integer, String, Float, Boolean, Enum, JSON

from waybill.app.db.session import Base
from waybill.app.db.types import UTCDateTime
from waybill.app.domain.enums import TripStatus
from waybill.app.domain.trip import Cargo, TimeWindow, Trip, TripNote
from waybill.app.models.mixins import OwnedRowMixin


class TripModel(OwnedRowMixin, Base):
    """Trip row."""
    __tablename__ = "trips"

    trip_number = Column(String(100), nullable=False, default="", index=True)

    # References (not ownership) to other fleet records
    driver_id = Column(String(32), nullable=True, index=True)
    truck_id = Column(String(32), nullable=True, index=True)
    start_facility_id = Column(String(32), nullable=True, index=True)
    end_facility_id = Column(String(32), nullable=True, index=True)

    # Time windows
    departure_scheduled = Column(UTCDateTime(), nullable=False)
    departure_actual = Column(UTCDateTime(), nullable=True)
    arrival_scheduled = Column(UTCDateTime(), nullable=False)
    arrival_actual = Column(UTCDateTime(), nullable=True)

    # Status
    status = Column(Enum(TripStatus), default=TripStatus.SCHEDULED, nullable=False, index=True)

    # Cargo
    cargo_description = Column(String(500), nullable=False, default="")
    cargo_weight = Column(Float, nullable=False, default=0)
    cargo_hazmat = Column(Boolean, nullable=False, default=False)

    fuel_usage_gallons = Column(Float, nullable=False, default=0)
    distance_miles = Column(Integer, nullable=False, default=0)

    notes = Column(JSON, nullable=False, default=list)

    @classmethod
    def values_from_entity(cls, trip: Trip) -> dict:
        return {
            **cls.base_values(trip),
            "trip_number": trip.trip_number,
            "driver_id": trip.driver_id,
            "truck_id": trip.truck_id,
            "start_facility_id": trip.start_facility_id,
            "end_facility_id": trip.end_facility_id,
            "departure_scheduled": trip.departure_time.scheduled,
            "departure_actual": trip.departure_time.actual,
            "arrival_scheduled": trip.arrival_time.scheduled,
            "arrival_actual": trip.arrival_time.actual,
            "status": trip.status,
            "cargo_description": trip.cargo.description,
            "cargo_weight": trip.cargo.weight,
            "cargo_hazmat": trip.cargo.hazmat,
            "fuel_usage_gallons": trip.fuel_usage_gallons,
            "distance_miles": trip.distance_miles,
            "notes": [note.model_dump(mode="json") for note in trip.notes],
        }

    def to_entity(self) -> Trip:
        return Trip(
            **self.base_fields(),
            trip_number=self.trip_number,
            driver_id=self.driver_id,
            truck_id=self.truck_id,
            start_facility_id=self.start_facility_id,
            end_facility_id=self.end_facility_id,
            departure_time=TimeWindow(scheduled=self.departure_scheduled, actual=self.departure_actual),
            arrival_time=TimeWindow(scheduled=self.arrival_scheduled, actual=self.arrival_actual),
            status=self.status,
            cargo=Cargo(
                description=self.cargo_description,
                weight=self.cargo_weight,
                hazmat=self.cargo_hazmat,
            ),
            fuel_usage_gallons=self.fuel_usage_gallons,
            distance_miles=self.distance_miles,
            notes=[TripNote.model_validate(note) for note in (self.notes or [])],
        )

    def __repr__(self):
        return f"<TripModel(id={self.id}, owner_id={self.owner_id}, status='{self.status.value}')>"
