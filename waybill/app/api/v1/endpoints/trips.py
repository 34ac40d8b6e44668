"""
Trip API Endpoints.

CRUD, filtered listing and the lifecycle operations. Every route is scoped
to the owner id resolved from the bearer token.
"""

from fastapi import APIRouter, Depends, Path, Query, status
from typing import Optional

from waybill.app.core.dependencies import get_current_owner
from waybill.app.domain.enums import TripStatus
from waybill.app.domain.filters import TripFilter
from waybill.app.domain.pagination import Page
from waybill.app.domain.trip import Trip
from waybill.app.schemas.trip import AddNoteRequest, ArrivalRequest, BeginTripRequest, TripCreate, TripUpdate
from waybill.app.services.registry import get_trip_service
from waybill.app.services.trip_service import TripService

router = APIRouter(prefix="/trips", tags=["Trips"])


@router.post("", response_model=Trip, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    owner_id: str = Depends(get_current_owner),
    service: TripService = Depends(get_trip_service)
):
    """
    Schedule a new trip.

    The trip always starts SCHEDULED with no actual times and no notes.
    """
    return await service.create(owner_id, trip_data.to_entity(owner_id))


@router.get("", response_model=Page[Trip])
async def list_trips(
    status_filter: Optional[TripStatus] = Query(None, alias="status"),
    driver_id: Optional[str] = Query(None),
    truck_id: Optional[str] = Query(None),
    start_facility_id: Optional[str] = Query(None),
    end_facility_id: Optional[str] = Query(None),
    limit: Optional[int] = Query(None, description="Page size (1-100, default 10)"),
    offset: Optional[int] = Query(None, description="Number of items to skip"),
    owner_id: str = Depends(get_current_owner),
    service: TripService = Depends(get_trip_service)
):
    """List the caller's trips, newest first."""
    trip_filter = TripFilter(
        status=status_filter,
        driver_id=driver_id,
        truck_id=truck_id,
        start_facility_id=start_facility_id,
        end_facility_id=end_facility_id,
    )
    return await service.list(owner_id, trip_filter, limit, offset)


@router.get("/{trip_id}", response_model=Trip)
async def get_trip(
    trip_id: str = Path(..., description="Trip ID"),
    expand: bool = Query(False, description="Embed driver, truck and facility snapshots"),
    owner_id: str = Depends(get_current_owner),
    service: TripService = Depends(get_trip_service)
):
    if expand:
        return await service.get_with_associations(trip_id, owner_id)
    return await service.get_by_id(trip_id, owner_id)


@router.patch("/{trip_id}", response_model=Trip)
async def update_trip(
    trip_data: TripUpdate,
    trip_id: str = Path(..., description="Trip ID"),
    owner_id: str = Depends(get_current_owner),
    service: TripService = Depends(get_trip_service)
):
    """
    Edit plain trip fields.

    Status, actual times and notes only change through the lifecycle routes.
    """
    return await service.update(trip_id, owner_id, trip_data.changes())


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_trip(
    trip_id: str = Path(..., description="Trip ID"),
    owner_id: str = Depends(get_current_owner),
    service: TripService = Depends(get_trip_service)
):
    await service.delete(trip_id, owner_id)


@router.post("/{trip_id}/begin", response_model=Trip)
async def begin_trip(
    body: BeginTripRequest,
    trip_id: str = Path(..., description="Trip ID"),
    owner_id: str = Depends(get_current_owner),
    service: TripService = Depends(get_trip_service)
):
    """SCHEDULED -> IN_TRANSIT. Records the actual departure time."""
    return await service.begin_trip(trip_id, owner_id, body.departure_time)


@router.post("/{trip_id}/complete", response_model=Trip)
async def complete_trip(
    body: ArrivalRequest,
    trip_id: str = Path(..., description="Trip ID"),
    owner_id: str = Depends(get_current_owner),
    service: TripService = Depends(get_trip_service)
):
    """IN_TRANSIT -> COMPLETED. Records the actual arrival time."""
    return await service.complete_successfully(trip_id, owner_id, body.arrival_time)


@router.post("/{trip_id}/fail", response_model=Trip)
async def fail_trip(
    body: ArrivalRequest,
    trip_id: str = Path(..., description="Trip ID"),
    owner_id: str = Depends(get_current_owner),
    service: TripService = Depends(get_trip_service)
):
    """IN_TRANSIT -> FAILED_DELIVERY. Records the actual arrival time."""
    return await service.complete_unsuccessfully(trip_id, owner_id, body.arrival_time)


@router.post("/{trip_id}/cancel", response_model=Trip)
async def cancel_trip(
    trip_id: str = Path(..., description="Trip ID"),
    owner_id: str = Depends(get_current_owner),
    service: TripService = Depends(get_trip_service)
):
    """SCHEDULED -> CANCELED."""
    return await service.cancel(trip_id, owner_id)


@router.post("/{trip_id}/notes", response_model=Trip, status_code=status.HTTP_201_CREATED)
async def add_trip_note(
    body: AddNoteRequest,
    trip_id: str = Path(..., description="Trip ID"),
    owner_id: str = Depends(get_current_owner),
    service: TripService = Depends(get_trip_service)
):
    """Append a note. Allowed in every status."""
    return await service.add_note(trip_id, owner_id, body.content)
