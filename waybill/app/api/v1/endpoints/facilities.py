"""
Facility API Endpoints.
"""

import logging
from fastapi import APIRouter, Depends, Path, Query, status
from typing import List, Optional

from waybill.app.core.dependencies import get_current_owner
from waybill.app.domain.enums import FacilityService
from waybill.app.domain.filters import FacilityFilter
from waybill.app.domain.pagination import Page
from waybill.app.domain.records import Facility
from waybill.app.schemas.facility import FacilityCreate, FacilityUpdate, ServicesUpdate
from waybill.app.services.fleet_service import FacilityRecordService
from waybill.app.services.registry import get_facility_service

logger = logging.getLogger("waybill.api.facilities")

router = APIRouter(prefix="/facilities", tags=["Facilities"])


def parse_services(raw: Optional[str]) -> List[FacilityService]:
    """
    Parse a comma-separated service list.

    Unknown codes are skipped rather than rejected, like every other list
    filter that cannot be applied.
    """
    services = []
    for code in (raw or "").split(","):
        code = code.strip().upper()
        if not code:
            continue
        try:
            services.append(FacilityService(code))
        except ValueError:
            logger.debug("Ignoring unknown facility service filter", extra={"service": code})
    return services


@router.post("", response_model=Facility, status_code=status.HTTP_201_CREATED)
async def create_facility(
    facility_data: FacilityCreate,
    owner_id: str = Depends(get_current_owner),
    service: FacilityRecordService = Depends(get_facility_service)
):
    return await service.create(owner_id, facility_data.to_entity(owner_id))


@router.get("", response_model=Page[Facility])
async def list_facilities(
    state_code: Optional[str] = Query(None, alias="stateCode", description="Address state"),
    type: Optional[str] = Query(None, description="Facility type"),
    services: Optional[str] = Query(None, description="Comma-separated services the facility must offer"),
    min_capacity: Optional[int] = Query(None, alias="minCapacity"),
    max_capacity: Optional[int] = Query(None, alias="maxCapacity"),
    limit: Optional[int] = Query(None),
    offset: Optional[int] = Query(None),
    owner_id: str = Depends(get_current_owner),
    service: FacilityRecordService = Depends(get_facility_service)
):
    facility_filter = FacilityFilter(
        state_code=state_code,
        type=type,
        services=parse_services(services),
        min_capacity=min_capacity,
        max_capacity=max_capacity,
    )
    return await service.list(owner_id, facility_filter, limit, offset)


@router.get("/{facility_id}", response_model=Facility)
async def get_facility(
    facility_id: str = Path(..., description="Facility ID"),
    owner_id: str = Depends(get_current_owner),
    service: FacilityRecordService = Depends(get_facility_service)
):
    return await service.get_by_id(facility_id, owner_id)


@router.patch("/{facility_id}", response_model=Facility)
async def update_facility(
    facility_data: FacilityUpdate,
    facility_id: str = Path(..., description="Facility ID"),
    owner_id: str = Depends(get_current_owner),
    service: FacilityRecordService = Depends(get_facility_service)
):
    return await service.update(facility_id, owner_id, facility_data.changes())


@router.put("/{facility_id}/services", response_model=Facility)
async def replace_facility_services(
    body: ServicesUpdate,
    facility_id: str = Path(..., description="Facility ID"),
    owner_id: str = Depends(get_current_owner),
    service: FacilityRecordService = Depends(get_facility_service)
):
    return await service.update_services(facility_id, owner_id, body.services)


@router.delete("/{facility_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_facility(
    facility_id: str = Path(..., description="Facility ID"),
    owner_id: str = Depends(get_current_owner),
    service: FacilityRecordService = Depends(get_facility_service)
):
    await service.delete(facility_id, owner_id)
