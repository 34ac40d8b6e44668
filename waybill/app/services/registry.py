"""
FastAPI dependencies that bind each service to the request's database session.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from waybill.app.db.session import get_db
from waybill.app.repositories.sqlalchemy_repository import (
    DriverRepository,
    FacilityRepository,
    FuelLogRepository,
    IncidentReportRepository,
    MaintenanceLogRepository,
    TripRepository,
    TruckRepository,
)
from waybill.app.services.fleet_service import (
    DriverService,
    FacilityRecordService,
    FuelLogService,
    IncidentReportService,
    MaintenanceLogService,
    TruckService,
)
from waybill.app.services.trip_service import TripService


def get_trip_service(db: AsyncSession = Depends(get_db)) -> TripService:
    return TripService(
        TripRepository(db),
        driver_repository=DriverRepository(db),
        truck_repository=TruckRepository(db),
        facility_repository=FacilityRepository(db),
    )


def get_driver_service(db: AsyncSession = Depends(get_db)) -> DriverService:
    return DriverService(DriverRepository(db))


def get_truck_service(db: AsyncSession = Depends(get_db)) -> TruckService:
    return TruckService(TruckRepository(db))


def get_facility_service(db: AsyncSession = Depends(get_db)) -> FacilityRecordService:
    return FacilityRecordService(FacilityRepository(db))


def get_fuel_log_service(db: AsyncSession = Depends(get_db)) -> FuelLogService:
    return FuelLogService(FuelLogRepository(db))


def get_maintenance_log_service(db: AsyncSession = Depends(get_db)) -> MaintenanceLogService:
    return MaintenanceLogService(MaintenanceLogRepository(db))


def get_incident_report_service(db: AsyncSession = Depends(get_db)) -> IncidentReportService:
    return IncidentReportService(IncidentReportRepository(db))
