"""
SQLAlchemy repository tests on in-memory SQLite.
"""

from datetime import date, datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from waybill.app.core.exceptions import ConflictError, RepositoryError, ResourceNotFoundError
from waybill.app.domain import trip_lifecycle
from waybill.app.domain.driver import Address
from waybill.app.domain.enums import FacilityService, IncidentType, TripStatus
from waybill.app.domain.filters import FacilityFilter, IncidentReportFilter, TripFilter, build_criterion
from waybill.app.domain.records import Facility, IncidentReport
from waybill.app.domain.trip import Cargo, TimeWindow, Trip
from waybill.app.repositories.sqlalchemy_repository import (
    FacilityRepository, IncidentReportRepository, TripRepository,
)

pytestmark = pytest.mark.asyncio

T0 = datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)


def make_trip(owner_id="owner-a", offset_minutes=0, **overrides) -> Trip:
    stamp = T0 + timedelta(minutes=offset_minutes)
    values = {
        "owner_id": owner_id,
        "departure_time": TimeWindow(scheduled=T0),
        "arrival_time": TimeWindow(scheduled=T0 + timedelta(hours=4)),
        "cargo": Cargo(description="Produce", weight=9.5, hazmat=False),
        "created_at": stamp,
        "updated_at": stamp,
    }
    values.update(overrides)
    return Trip(**values)


def make_facility(owner_id="owner-a", state="CA", capacity=20, services=(), offset_minutes=0) -> Facility:
    stamp = T0 + timedelta(minutes=offset_minutes)
    return Facility(
        owner_id=owner_id,
        facility_number=f"F-{state}-{capacity}",
        name="Depot",
        address=Address(city="Fresno", state=state),
        parking_capacity=capacity,
        services_available=list(services),
        created_at=stamp,
        updated_at=stamp,
    )


async def test_round_trip_preserves_embedded_values(db_session):
    repo = TripRepository(db_session)
    trip = make_trip(trip_number="TR-9")
    trip_lifecycle.begin_trip(trip, T0 + timedelta(minutes=3), now=T0)
    trip_lifecycle.add_note(trip, "sealed", now=T0)

    await repo.add(trip)
    loaded = await repo.find_by_id(trip.id, "owner-a")

    assert loaded.status == TripStatus.IN_TRANSIT
    assert loaded.departure_time.actual == T0 + timedelta(minutes=3)
    assert loaded.departure_time.actual.tzinfo is not None
    assert loaded.cargo == trip.cargo
    assert [n.content for n in loaded.notes] == ["sealed"]
    assert loaded.notes[0].timestamp == T0


async def test_find_by_id_is_owner_scoped(db_session):
    repo = TripRepository(db_session)
    trip = await repo.add(make_trip(owner_id="owner-b"))

    assert await repo.find_by_id(trip.id, "owner-a") is None
    assert (await repo.find_by_id(trip.id, "owner-b")).id == trip.id


async def test_save_bumps_version_and_detects_stale_writes(db_session):
    repo = TripRepository(db_session)
    trip = await repo.add(make_trip())

    first = await repo.find_by_id(trip.id, "owner-a")
    stale = await repo.find_by_id(trip.id, "owner-a")

    saved = await repo.save(trip_lifecycle.cancel(first, now=T0))
    assert saved.version == 2
    assert (await repo.find_by_id(trip.id, "owner-a")).status == TripStatus.CANCELED

    with pytest.raises(ConflictError):
        await repo.save(trip_lifecycle.begin_trip(stale, T0, now=T0))

    assert (await repo.find_by_id(trip.id, "owner-a")).status == TripStatus.CANCELED


async def test_save_of_missing_or_foreign_row_is_not_found(db_session):
    repo = TripRepository(db_session)
    trip = await repo.add(make_trip(owner_id="owner-b"))

    with pytest.raises(ResourceNotFoundError):
        await repo.save(make_trip())
    with pytest.raises(ResourceNotFoundError):
        await repo.save(trip.model_copy(update={"owner_id": "owner-a"}))


async def test_delete_counts_rows(db_session):
    repo = TripRepository(db_session)
    trip = await repo.add(make_trip())

    with pytest.raises(ResourceNotFoundError):
        await repo.delete_by_id(trip.id, "owner-b")

    await repo.delete_by_id(trip.id, "owner-a")
    assert await repo.find_by_id(trip.id, "owner-a") is None

    with pytest.raises(ResourceNotFoundError):
        await repo.delete_by_id(trip.id, "owner-a")


async def test_query_orders_newest_first_and_counts_all_matches(db_session):
    repo = TripRepository(db_session)
    for minute in range(5):
        await repo.add(make_trip(offset_minutes=minute, trip_number=f"TR-{minute}"))
    await repo.add(make_trip(owner_id="owner-b"))

    items, total = await repo.query(build_criterion("owner-a"), limit=2, offset=1)

    assert total == 5
    assert [t.trip_number for t in items] == ["TR-3", "TR-2"]


async def test_query_filters_on_enum_status(db_session):
    repo = TripRepository(db_session)
    scheduled = await repo.add(make_trip())
    canceled = make_trip(offset_minutes=1)
    await repo.add(trip_lifecycle.cancel(canceled, now=T0))

    items, total = await repo.query(
        build_criterion("owner-a", TripFilter(status=TripStatus.SCHEDULED)), limit=10, offset=0
    )

    assert total == 1
    assert items[0].id == scheduled.id


async def test_facility_nested_range_and_contains_all(db_session):
    repo = FacilityRepository(db_session)
    full = await repo.add(make_facility(
        capacity=40, services=[FacilityService.FUEL, FacilityService.REPAIRS, FacilityService.PARKING],
    ))
    await repo.add(make_facility(capacity=40, services=[FacilityService.FUEL], offset_minutes=1))
    await repo.add(make_facility(capacity=5, services=[FacilityService.FUEL, FacilityService.REPAIRS], offset_minutes=2))
    await repo.add(make_facility(state="NV", capacity=40, services=[FacilityService.FUEL, FacilityService.REPAIRS], offset_minutes=3))
    await repo.add(make_facility(owner_id="owner-b", capacity=40, services=[FacilityService.FUEL, FacilityService.REPAIRS]))

    list_filter = FacilityFilter(
        state_code="CA",
        services=[FacilityService.REPAIRS, FacilityService.FUEL],
        min_capacity=10,
        max_capacity=50,
    )
    items, total = await repo.query(build_criterion("owner-a", list_filter), limit=10, offset=0)

    assert total == 1
    assert items[0].id == full.id
    assert items[0].services_available == [FacilityService.FUEL, FacilityService.REPAIRS, FacilityService.PARKING]


async def test_incident_filters(db_session):
    repo = IncidentReportRepository(db_session)
    report = await repo.add(IncidentReport(
        owner_id="owner-a", trip_id="trip-1", truck_id="truck-1",
        type=IncidentType.BREAKDOWN, date=date(2024, 5, 1),
    ))
    await repo.add(IncidentReport(
        owner_id="owner-a", trip_id="trip-2", type=IncidentType.ACCIDENT, date=date(2024, 5, 2),
    ))

    items, total = await repo.query(
        build_criterion("owner-a", IncidentReportFilter(trip_id="trip-1", type=IncidentType.BREAKDOWN)),
        limit=10, offset=0,
    )

    assert total == 1
    assert items[0].id == report.id


async def test_storage_failure_is_wrapped(db_session, mocker):
    repo = TripRepository(db_session)
    mocker.patch.object(
        db_session, "execute",
        side_effect=OperationalError("SELECT", {}, Exception("database is locked")),
    )

    with pytest.raises(RepositoryError) as exc_info:
        await repo.find_by_id("any", "owner-a")

    assert exc_info.value.status_code == 503
    assert exc_info.value.details == {"cause": "OperationalError"}
