"""
Truck API Endpoints.

Status moves through the dispatch/maintenance/available/retire routes;
mileage and last maintenance date have dedicated PATCH routes.
"""

from fastapi import APIRouter, Depends, Path, Query, status
from typing import Optional

from waybill.app.core.dependencies import get_current_owner
from waybill.app.domain.enums import FuelType, TrailerType, TruckStatus
from waybill.app.domain.filters import TruckFilter
from waybill.app.domain.pagination import Page
from waybill.app.domain.truck import Truck
from waybill.app.schemas.truck import LastMaintenanceUpdate, MileageUpdate, TruckCreate, TruckUpdate
from waybill.app.services.fleet_service import TruckService
from waybill.app.services.registry import get_truck_service

router = APIRouter(prefix="/trucks", tags=["Trucks"])


@router.post("", response_model=Truck, status_code=status.HTTP_201_CREATED)
async def create_truck(
    truck_data: TruckCreate,
    owner_id: str = Depends(get_current_owner),
    service: TruckService = Depends(get_truck_service)
):
    return await service.create(owner_id, truck_data.to_entity(owner_id))


@router.get("", response_model=Page[Truck])
async def list_trucks(
    vin: Optional[str] = Query(None),
    status_filter: Optional[TruckStatus] = Query(None, alias="status"),
    assigned_driver_id: Optional[str] = Query(None),
    trailer_type: Optional[TrailerType] = Query(None),
    fuel_type: Optional[FuelType] = Query(None),
    limit: Optional[int] = Query(None),
    offset: Optional[int] = Query(None),
    owner_id: str = Depends(get_current_owner),
    service: TruckService = Depends(get_truck_service)
):
    truck_filter = TruckFilter(
        vin=vin,
        status=status_filter,
        assigned_driver_id=assigned_driver_id,
        trailer_type=trailer_type,
        fuel_type=fuel_type,
    )
    return await service.list(owner_id, truck_filter, limit, offset)


@router.get("/{truck_id}", response_model=Truck)
async def get_truck(
    truck_id: str = Path(..., description="Truck ID"),
    owner_id: str = Depends(get_current_owner),
    service: TruckService = Depends(get_truck_service)
):
    return await service.get_by_id(truck_id, owner_id)


@router.patch("/{truck_id}", response_model=Truck)
async def update_truck(
    truck_data: TruckUpdate,
    truck_id: str = Path(..., description="Truck ID"),
    owner_id: str = Depends(get_current_owner),
    service: TruckService = Depends(get_truck_service)
):
    return await service.update(truck_id, owner_id, truck_data.changes())


@router.delete("/{truck_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_truck(
    truck_id: str = Path(..., description="Truck ID"),
    owner_id: str = Depends(get_current_owner),
    service: TruckService = Depends(get_truck_service)
):
    await service.delete(truck_id, owner_id)


@router.post("/{truck_id}/dispatch", response_model=Truck)
async def dispatch_truck(
    truck_id: str = Path(..., description="Truck ID"),
    owner_id: str = Depends(get_current_owner),
    service: TruckService = Depends(get_truck_service)
):
    """AVAILABLE or MAINTENANCE -> IN_TRANSIT."""
    return await service.dispatch(truck_id, owner_id)


@router.post("/{truck_id}/maintenance", response_model=Truck)
async def send_truck_to_maintenance(
    truck_id: str = Path(..., description="Truck ID"),
    owner_id: str = Depends(get_current_owner),
    service: TruckService = Depends(get_truck_service)
):
    """IN_TRANSIT -> MAINTENANCE."""
    return await service.send_to_maintenance(truck_id, owner_id)


@router.post("/{truck_id}/available", response_model=Truck)
async def make_truck_available(
    truck_id: str = Path(..., description="Truck ID"),
    owner_id: str = Depends(get_current_owner),
    service: TruckService = Depends(get_truck_service)
):
    """IN_TRANSIT -> AVAILABLE."""
    return await service.make_available(truck_id, owner_id)


@router.post("/{truck_id}/retire", response_model=Truck)
async def retire_truck(
    truck_id: str = Path(..., description="Truck ID"),
    owner_id: str = Depends(get_current_owner),
    service: TruckService = Depends(get_truck_service)
):
    """Any non-retired status -> RETIRED. Clears the driver assignment."""
    return await service.retire(truck_id, owner_id)


@router.patch("/{truck_id}/mileage", response_model=Truck)
async def update_truck_mileage(
    body: MileageUpdate,
    truck_id: str = Path(..., description="Truck ID"),
    owner_id: str = Depends(get_current_owner),
    service: TruckService = Depends(get_truck_service)
):
    """Record a new odometer reading. Readings never go down."""
    return await service.update_mileage(truck_id, owner_id, body.mileage)


@router.patch("/{truck_id}/last-maintenance", response_model=Truck)
async def update_truck_last_maintenance(
    body: LastMaintenanceUpdate,
    truck_id: str = Path(..., description="Truck ID"),
    owner_id: str = Depends(get_current_owner),
    service: TruckService = Depends(get_truck_service)
):
    return await service.record_maintenance(truck_id, owner_id, body.last_maintenance)
