"""
Fuel log, maintenance log and incident report API Endpoints.

These records have no lifecycle: create, read, edit, delete and filtered
listing only.
"""

from fastapi import APIRouter, Depends, Path, Query, status
from typing import Optional

from waybill.app.core.dependencies import get_current_owner
from waybill.app.domain.enums import IncidentType
from waybill.app.domain.filters import FuelLogFilter, IncidentReportFilter, MaintenanceLogFilter
from waybill.app.domain.pagination import Page
from waybill.app.domain.records import FuelLog, IncidentReport, MaintenanceLog
from waybill.app.schemas.logs import (
    FuelLogCreate,
    FuelLogUpdate,
    IncidentReportCreate,
    IncidentReportUpdate,
    MaintenanceLogCreate,
    MaintenanceLogUpdate,
)
from waybill.app.services.fleet_service import FuelLogService, IncidentReportService, MaintenanceLogService
from waybill.app.services.registry import (
    get_fuel_log_service,
    get_incident_report_service,
    get_maintenance_log_service,
)

router = APIRouter()


# Fuel logs
@router.post("/fuel-logs", response_model=FuelLog, status_code=status.HTTP_201_CREATED, tags=["Fuel Logs"])
async def create_fuel_log(
    log_data: FuelLogCreate,
    owner_id: str = Depends(get_current_owner),
    service: FuelLogService = Depends(get_fuel_log_service)
):
    return await service.create(owner_id, log_data.to_entity(owner_id))


@router.get("/fuel-logs", response_model=Page[FuelLog], tags=["Fuel Logs"])
async def list_fuel_logs(
    truck_id: Optional[str] = Query(None),
    driver_id: Optional[str] = Query(None),
    limit: Optional[int] = Query(None),
    offset: Optional[int] = Query(None),
    owner_id: str = Depends(get_current_owner),
    service: FuelLogService = Depends(get_fuel_log_service)
):
    log_filter = FuelLogFilter(truck_id=truck_id, driver_id=driver_id)
    return await service.list(owner_id, log_filter, limit, offset)


@router.get("/fuel-logs/{log_id}", response_model=FuelLog, tags=["Fuel Logs"])
async def get_fuel_log(
    log_id: str = Path(..., description="Fuel log ID"),
    owner_id: str = Depends(get_current_owner),
    service: FuelLogService = Depends(get_fuel_log_service)
):
    return await service.get_by_id(log_id, owner_id)


@router.patch("/fuel-logs/{log_id}", response_model=FuelLog, tags=["Fuel Logs"])
async def update_fuel_log(
    log_data: FuelLogUpdate,
    log_id: str = Path(..., description="Fuel log ID"),
    owner_id: str = Depends(get_current_owner),
    service: FuelLogService = Depends(get_fuel_log_service)
):
    return await service.update(log_id, owner_id, log_data.changes())


@router.delete("/fuel-logs/{log_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["Fuel Logs"])
async def delete_fuel_log(
    log_id: str = Path(..., description="Fuel log ID"),
    owner_id: str = Depends(get_current_owner),
    service: FuelLogService = Depends(get_fuel_log_service)
):
    await service.delete(log_id, owner_id)


# Maintenance logs
@router.post("/maintenance-logs", response_model=MaintenanceLog, status_code=status.HTTP_201_CREATED, tags=["Maintenance Logs"])
async def create_maintenance_log(
    log_data: MaintenanceLogCreate,
    owner_id: str = Depends(get_current_owner),
    service: MaintenanceLogService = Depends(get_maintenance_log_service)
):
    return await service.create(owner_id, log_data.to_entity(owner_id))


@router.get("/maintenance-logs", response_model=Page[MaintenanceLog], tags=["Maintenance Logs"])
async def list_maintenance_logs(
    truck_id: Optional[str] = Query(None),
    service_type: Optional[str] = Query(None),
    limit: Optional[int] = Query(None),
    offset: Optional[int] = Query(None),
    owner_id: str = Depends(get_current_owner),
    service: MaintenanceLogService = Depends(get_maintenance_log_service)
):
    log_filter = MaintenanceLogFilter(truck_id=truck_id, service_type=service_type)
    return await service.list(owner_id, log_filter, limit, offset)


@router.get("/maintenance-logs/{log_id}", response_model=MaintenanceLog, tags=["Maintenance Logs"])
async def get_maintenance_log(
    log_id: str = Path(..., description="Maintenance log ID"),
    owner_id: str = Depends(get_current_owner),
    service: MaintenanceLogService = Depends(get_maintenance_log_service)
):
    return await service.get_by_id(log_id, owner_id)


@router.patch("/maintenance-logs/{log_id}", response_model=MaintenanceLog, tags=["Maintenance Logs"])
async def update_maintenance_log(
    log_data: MaintenanceLogUpdate,
    log_id: str = Path(..., description="Maintenance log ID"),
    owner_id: str = Depends(get_current_owner),
    service: MaintenanceLogService = Depends(get_maintenance_log_service)
):
    return await service.update(log_id, owner_id, log_data.changes())


@router.delete("/maintenance-logs/{log_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["Maintenance Logs"])
async def delete_maintenance_log(
    log_id: str = Path(..., description="Maintenance log ID"),
    owner_id: str = Depends(get_current_owner),
    service: MaintenanceLogService = Depends(get_maintenance_log_service)
):
    await service.delete(log_id, owner_id)


# Incident reports
@router.post("/incident-reports", response_model=IncidentReport, status_code=status.HTTP_201_CREATED, tags=["Incident Reports"])
async def create_incident_report(
    report_data: IncidentReportCreate,
    owner_id: str = Depends(get_current_owner),
    service: IncidentReportService = Depends(get_incident_report_service)
):
    return await service.create(owner_id, report_data.to_entity(owner_id))


@router.get("/incident-reports", response_model=Page[IncidentReport], tags=["Incident Reports"])
async def list_incident_reports(
    trip_id: Optional[str] = Query(None, alias="tripID"),
    truck_id: Optional[str] = Query(None, alias="truckID"),
    driver_id: Optional[str] = Query(None),
    type: Optional[IncidentType] = Query(None),
    limit: Optional[int] = Query(None),
    offset: Optional[int] = Query(None),
    owner_id: str = Depends(get_current_owner),
    service: IncidentReportService = Depends(get_incident_report_service)
):
    report_filter = IncidentReportFilter(trip_id=trip_id, truck_id=truck_id, driver_id=driver_id, type=type)
    return await service.list(owner_id, report_filter, limit, offset)


@router.get("/incident-reports/{report_id}", response_model=IncidentReport, tags=["Incident Reports"])
async def get_incident_report(
    report_id: str = Path(..., description="Incident report ID"),
    owner_id: str = Depends(get_current_owner),
    service: IncidentReportService = Depends(get_incident_report_service)
):
    return await service.get_by_id(report_id, owner_id)


@router.patch("/incident-reports/{report_id}", response_model=IncidentReport, tags=["Incident Reports"])
async def update_incident_report(
    report_data: IncidentReportUpdate,
    report_id: str = Path(..., description="Incident report ID"),
    owner_id: str = Depends(get_current_owner),
    service: IncidentReportService = Depends(get_incident_report_service)
):
    return await service.update(report_id, owner_id, report_data.changes())


@router.delete("/incident-reports/{report_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["Incident Reports"])
async def delete_incident_report(
    report_id: str = Path(..., description="Incident report ID"),
    owner_id: str = Depends(get_current_owner),
    service: IncidentReportService = Depends(get_incident_report_service)
):
    await service.delete(report_id, owner_id)
