"""
Trip lifecycle tests.

Covers the transition table by enumeration, the timestamps each named
operation records, and note validation.
"""

import itertools
from datetime import datetime, timedelta, timezone

import pytest

from waybill.app.core.exceptions import StateTransitionError, ValidationError
from waybill.app.domain import trip_lifecycle
from waybill.app.domain.enums import TripStatus
from waybill.app.domain.lifecycle import allowed_pairs, can_transition, is_terminal
from waybill.app.domain.trip import MAX_NOTE_LENGTH, TimeWindow, Trip

T0 = datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)
DEPARTED = T0 + timedelta(minutes=15)
ARRIVED = T0 + timedelta(hours=6)
NOW = T0 + timedelta(days=1)


def make_trip(**overrides) -> Trip:
    values = {
        "owner_id": "owner-a",
        "trip_number": "TR-1",
        "departure_time": TimeWindow(scheduled=T0),
        "arrival_time": TimeWindow(scheduled=T0 + timedelta(hours=5)),
        "created_at": T0 - timedelta(days=1),
        "updated_at": T0 - timedelta(days=1),
    }
    values.update(overrides)
    return Trip(**values)


def in_status(status: TripStatus) -> Trip:
    """Reach `status` by walking the table from SCHEDULED."""
    trip = make_trip()
    if status == TripStatus.CANCELED:
        return trip_lifecycle.cancel(trip, now=T0)
    if status == TripStatus.SCHEDULED:
        return trip
    trip_lifecycle.begin_trip(trip, DEPARTED, now=T0)
    if status == TripStatus.COMPLETED:
        trip_lifecycle.complete_successfully(trip, ARRIVED, now=T0)
    elif status == TripStatus.FAILED_DELIVERY:
        trip_lifecycle.complete_unsuccessfully(trip, ARRIVED, now=T0)
    return trip


OPERATIONS = {
    TripStatus.IN_TRANSIT: lambda trip: trip_lifecycle.begin_trip(trip, DEPARTED, now=NOW),
    TripStatus.COMPLETED: lambda trip: trip_lifecycle.complete_successfully(trip, ARRIVED, now=NOW),
    TripStatus.FAILED_DELIVERY: lambda trip: trip_lifecycle.complete_unsuccessfully(trip, ARRIVED, now=NOW),
    TripStatus.CANCELED: lambda trip: trip_lifecycle.cancel(trip, now=NOW),
}


def test_transition_table_is_exactly_the_documented_one():
    assert set(allowed_pairs(trip_lifecycle.TRIP_TRANSITIONS)) == {
        (TripStatus.SCHEDULED, TripStatus.IN_TRANSIT),
        (TripStatus.SCHEDULED, TripStatus.CANCELED),
        (TripStatus.IN_TRANSIT, TripStatus.COMPLETED),
        (TripStatus.IN_TRANSIT, TripStatus.FAILED_DELIVERY),
    }
    for status in (TripStatus.COMPLETED, TripStatus.FAILED_DELIVERY, TripStatus.CANCELED):
        assert is_terminal(trip_lifecycle.TRIP_TRANSITIONS, status)


@pytest.mark.parametrize(
    "current,target",
    [
        pair for pair in itertools.product(TripStatus, OPERATIONS)
        if not can_transition(trip_lifecycle.TRIP_TRANSITIONS, *pair)
    ],
)
def test_illegal_transitions_are_rejected_without_side_effects(current, target):
    trip = in_status(current)
    before = trip.model_dump()

    with pytest.raises(StateTransitionError) as exc_info:
        OPERATIONS[target](trip)

    assert exc_info.value.current_state == current
    assert exc_info.value.attempted_state == target
    assert exc_info.value.status_code == 409
    assert trip.model_dump() == before


@pytest.mark.parametrize("status", list(TripStatus))
def test_reachable_states_keep_timestamps_consistent(status):
    assert in_status(status).is_consistent()


def test_begin_records_departure_and_bumps_updated_at():
    trip = make_trip()

    trip_lifecycle.begin_trip(trip, DEPARTED, now=NOW)

    assert trip.status == TripStatus.IN_TRANSIT
    assert trip.departure_time.actual == DEPARTED
    assert trip.departure_time.scheduled == T0
    assert trip.arrival_time.actual is None
    assert trip.updated_at == NOW


def test_successful_and_failed_delivery_share_arrival_field():
    completed = in_status(TripStatus.IN_TRANSIT)
    failed = in_status(TripStatus.IN_TRANSIT)

    trip_lifecycle.complete_successfully(completed, ARRIVED, now=NOW)
    trip_lifecycle.complete_unsuccessfully(failed, ARRIVED, now=NOW)

    assert completed.status == TripStatus.COMPLETED
    assert failed.status == TripStatus.FAILED_DELIVERY
    assert completed.arrival_time.actual == failed.arrival_time.actual == ARRIVED


def test_full_journey_then_cancel_is_rejected():
    trip = make_trip()
    trip_lifecycle.begin_trip(trip, DEPARTED, now=NOW)
    trip_lifecycle.complete_successfully(trip, ARRIVED, now=NOW)

    with pytest.raises(StateTransitionError) as exc_info:
        trip_lifecycle.cancel(trip)

    assert exc_info.value.current_state == TripStatus.COMPLETED
    assert exc_info.value.details == {"current_state": "COMPLETED", "attempted_state": "CANCELED"}


def test_cancel_from_scheduled_is_terminal():
    trip = trip_lifecycle.cancel(make_trip(), now=NOW)

    assert trip.status == TripStatus.CANCELED
    assert trip.departure_time.actual is None
    for operation in OPERATIONS.values():
        with pytest.raises(StateTransitionError):
            operation(trip)


class TestNotes:

    @pytest.mark.parametrize("content", ["", "   ", "\n\t", "x" * (MAX_NOTE_LENGTH + 1)])
    def test_rejects_bad_content(self, content):
        trip = make_trip()
        with pytest.raises(ValidationError) as exc_info:
            trip_lifecycle.add_note(trip, content)
        assert exc_info.value.status_code == 422
        assert trip.notes == []

    def test_accepts_max_length(self):
        trip = trip_lifecycle.add_note(make_trip(), "x" * MAX_NOTE_LENGTH, now=NOW)
        assert len(trip.notes[0].content) == MAX_NOTE_LENGTH

    def test_trims_and_appends_in_order(self):
        trip = make_trip()
        trip_lifecycle.add_note(trip, "  first  ", now=NOW)
        trip_lifecycle.add_note(trip, "second", now=NOW + timedelta(minutes=1))

        assert [n.content for n in trip.notes] == ["first", "second"]
        assert trip.notes[0].timestamp == NOW
        assert trip.updated_at == NOW + timedelta(minutes=1)

    @pytest.mark.parametrize("status", list(TripStatus))
    def test_allowed_in_every_status(self, status):
        trip = trip_lifecycle.add_note(in_status(status), "checkpoint", now=NOW)
        assert trip.status == status
        assert trip.notes[-1].content == "checkpoint"
