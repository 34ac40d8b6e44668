"""
Trip lifecycle operations.

One function per named transition. Each one checks the transition table
before touching the trip, so a rejected call leaves the trip exactly as it
was. The timestamp a transition records is bound to the operation, not to the
target status: a successful and a failed delivery both fill
`arrival_time.actual`.

    SCHEDULED  -> IN_TRANSIT, CANCELED
    IN_TRANSIT -> COMPLETED, FAILED_DELIVERY
    COMPLETED, FAILED_DELIVERY, CANCELED are terminal
"""

from datetime import datetime
from typing import Dict, FrozenSet, Optional

from waybill.app.core.exceptions import ValidationError
from waybill.app.domain.base import utcnow
from waybill.app.domain.enums import TripStatus
from waybill.app.domain.lifecycle import ensure_transition
from waybill.app.domain.trip import MAX_NOTE_LENGTH, TimeWindow, Trip, TripNote

TRIP_TRANSITIONS: Dict[TripStatus, FrozenSet[TripStatus]] = {
    TripStatus.SCHEDULED: frozenset({TripStatus.IN_TRANSIT, TripStatus.CANCELED}),
    TripStatus.IN_TRANSIT: frozenset({TripStatus.COMPLETED, TripStatus.FAILED_DELIVERY}),
    TripStatus.COMPLETED: frozenset(),
    TripStatus.FAILED_DELIVERY: frozenset(),
    TripStatus.CANCELED: frozenset(),
}


def _move(trip: Trip, target: TripStatus, now: datetime) -> None:
    trip.status = target
    trip.touch(now)


def begin_trip(trip: Trip, departure_actual: datetime, now: Optional[datetime] = None) -> Trip:
    """SCHEDULED -> IN_TRANSIT, recording the actual departure."""
    ensure_transition(TRIP_TRANSITIONS, trip.status, TripStatus.IN_TRANSIT, entity="trip")
    trip.departure_time = TimeWindow(scheduled=trip.departure_time.scheduled, actual=departure_actual)
    _move(trip, TripStatus.IN_TRANSIT, now or utcnow())
    return trip


def complete_successfully(trip: Trip, arrival_actual: datetime, now: Optional[datetime] = None) -> Trip:
    """IN_TRANSIT -> COMPLETED, recording the actual arrival."""
    ensure_transition(TRIP_TRANSITIONS, trip.status, TripStatus.COMPLETED, entity="trip")
    trip.arrival_time = TimeWindow(scheduled=trip.arrival_time.scheduled, actual=arrival_actual)
    _move(trip, TripStatus.COMPLETED, now or utcnow())
    return trip


def complete_unsuccessfully(trip: Trip, arrival_actual: datetime, now: Optional[datetime] = None) -> Trip:
    """IN_TRANSIT -> FAILED_DELIVERY, recording the actual arrival."""
    ensure_transition(TRIP_TRANSITIONS, trip.status, TripStatus.FAILED_DELIVERY, entity="trip")
    trip.arrival_time = TimeWindow(scheduled=trip.arrival_time.scheduled, actual=arrival_actual)
    _move(trip, TripStatus.FAILED_DELIVERY, now or utcnow())
    return trip


def cancel(trip: Trip, now: Optional[datetime] = None) -> Trip:
    """SCHEDULED -> CANCELED."""
    ensure_transition(TRIP_TRANSITIONS, trip.status, TripStatus.CANCELED, entity="trip")
    _move(trip, TripStatus.CANCELED, now or utcnow())
    return trip


def validate_note(content: str) -> str:
    """
    Return the trimmed note content.

    Raises:
        ValidationError: If the trimmed content is empty or longer than
            MAX_NOTE_LENGTH characters
    """
    content = (content or "").strip()
    if not content:
        raise ValidationError("note content cannot be empty", field="content")
    if len(content) > MAX_NOTE_LENGTH:
        raise ValidationError(
            f"note content exceeds maximum length of {MAX_NOTE_LENGTH} characters",
            field="content"
        )
    return content


def add_note(trip: Trip, content: str, now: Optional[datetime] = None) -> Trip:
    """Append a note. Allowed in every status."""
    content = validate_note(content)
    now = now or utcnow()
    trip.notes = [*trip.notes, TripNote(timestamp=now, content=content)]
    trip.touch(now)
    return trip
