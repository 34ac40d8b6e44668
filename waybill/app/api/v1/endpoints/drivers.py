"""
Driver API Endpoints.
"""

from fastapi import APIRouter, Depends, Path, Query, status
from typing import Optional

from waybill.app.core.dependencies import get_current_owner
from waybill.app.domain.driver import Driver
from waybill.app.domain.enums import EmploymentStatus
from waybill.app.domain.filters import DriverFilter
from waybill.app.domain.pagination import Page
from waybill.app.schemas.driver import DriverCreate, DriverUpdate
from waybill.app.services.fleet_service import DriverService
from waybill.app.services.registry import get_driver_service

router = APIRouter(prefix="/drivers", tags=["Drivers"])


@router.post("", response_model=Driver, status_code=status.HTTP_201_CREATED)
async def create_driver(
    driver_data: DriverCreate,
    owner_id: str = Depends(get_current_owner),
    service: DriverService = Depends(get_driver_service)
):
    return await service.create(owner_id, driver_data.to_entity(owner_id))


@router.get("", response_model=Page[Driver])
async def list_drivers(
    license_state: Optional[str] = Query(None, description="Two-letter license state"),
    employment_status: Optional[EmploymentStatus] = Query(None),
    assigned_truck_id: Optional[str] = Query(None),
    limit: Optional[int] = Query(None),
    offset: Optional[int] = Query(None),
    owner_id: str = Depends(get_current_owner),
    service: DriverService = Depends(get_driver_service)
):
    driver_filter = DriverFilter(
        license_state=license_state,
        employment_status=employment_status,
        assigned_truck_id=assigned_truck_id,
    )
    return await service.list(owner_id, driver_filter, limit, offset)


@router.get("/{driver_id}", response_model=Driver)
async def get_driver(
    driver_id: str = Path(..., description="Driver ID"),
    owner_id: str = Depends(get_current_owner),
    service: DriverService = Depends(get_driver_service)
):
    return await service.get_by_id(driver_id, owner_id)


@router.patch("/{driver_id}", response_model=Driver)
async def update_driver(
    driver_data: DriverUpdate,
    driver_id: str = Path(..., description="Driver ID"),
    owner_id: str = Depends(get_current_owner),
    service: DriverService = Depends(get_driver_service)
):
    """Edit driver details. Employment status has its own routes."""
    return await service.update(driver_id, owner_id, driver_data.changes())


@router.delete("/{driver_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_driver(
    driver_id: str = Path(..., description="Driver ID"),
    owner_id: str = Depends(get_current_owner),
    service: DriverService = Depends(get_driver_service)
):
    await service.delete(driver_id, owner_id)


@router.post("/{driver_id}/suspend", response_model=Driver)
async def suspend_driver(
    driver_id: str = Path(..., description="Driver ID"),
    owner_id: str = Depends(get_current_owner),
    service: DriverService = Depends(get_driver_service)
):
    """ACTIVE -> SUSPENDED."""
    return await service.suspend(driver_id, owner_id)


@router.post("/{driver_id}/reinstate", response_model=Driver)
async def reinstate_driver(
    driver_id: str = Path(..., description="Driver ID"),
    owner_id: str = Depends(get_current_owner),
    service: DriverService = Depends(get_driver_service)
):
    """SUSPENDED -> ACTIVE."""
    return await service.reinstate(driver_id, owner_id)


@router.post("/{driver_id}/terminate", response_model=Driver)
async def terminate_driver(
    driver_id: str = Path(..., description="Driver ID"),
    owner_id: str = Depends(get_current_owner),
    service: DriverService = Depends(get_driver_service)
):
    """ACTIVE or SUSPENDED -> TERMINATED. Clears the truck assignment."""
    return await service.terminate(driver_id, owner_id)
