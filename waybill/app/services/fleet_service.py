"""
Driver, truck, facility and log services.

Drivers and trucks carry their own lifecycles; the other records only need
the plain create/read/edit/delete/list operations.
"""

from datetime import date
from typing import List

from waybill.app.domain import driver_lifecycle, truck_lifecycle
from waybill.app.domain.driver import Driver
from waybill.app.domain.enums import FacilityService
from waybill.app.domain.records import Facility, FuelLog, IncidentReport, MaintenanceLog
from waybill.app.domain.truck import Truck
from waybill.app.services.resource_service import ResourceService


class DriverService(ResourceService[Driver]):
    entity_type = Driver
    status_field = "employment_status"

    async def suspend(self, driver_id: str, owner_id: str) -> Driver:
        return await self._mutate(
            driver_id, owner_id,
            lambda driver: driver_lifecycle.suspend(driver, now=self.clock()),
            "suspend"
        )

    async def reinstate(self, driver_id: str, owner_id: str) -> Driver:
        return await self._mutate(
            driver_id, owner_id,
            lambda driver: driver_lifecycle.reinstate(driver, now=self.clock()),
            "reinstate"
        )

    async def terminate(self, driver_id: str, owner_id: str) -> Driver:
        return await self._mutate(
            driver_id, owner_id,
            lambda driver: driver_lifecycle.terminate(driver, now=self.clock()),
            "terminate"
        )


class TruckService(ResourceService[Truck]):
    entity_type = Truck

    async def dispatch(self, truck_id: str, owner_id: str) -> Truck:
        return await self._mutate(
            truck_id, owner_id,
            lambda truck: truck_lifecycle.dispatch(truck, now=self.clock()),
            "dispatch"
        )

    async def send_to_maintenance(self, truck_id: str, owner_id: str) -> Truck:
        return await self._mutate(
            truck_id, owner_id,
            lambda truck: truck_lifecycle.send_to_maintenance(truck, now=self.clock()),
            "maintenance"
        )

    async def make_available(self, truck_id: str, owner_id: str) -> Truck:
        return await self._mutate(
            truck_id, owner_id,
            lambda truck: truck_lifecycle.make_available(truck, now=self.clock()),
            "available"
        )

    async def retire(self, truck_id: str, owner_id: str) -> Truck:
        return await self._mutate(
            truck_id, owner_id,
            lambda truck: truck_lifecycle.retire(truck, now=self.clock()),
            "retire"
        )

    async def update_mileage(self, truck_id: str, owner_id: str, mileage: int) -> Truck:
        """Raise the odometer reading; a lower reading is a ValidationError."""
        return await self._mutate(
            truck_id, owner_id,
            lambda truck: truck_lifecycle.update_mileage(truck, mileage, now=self.clock()),
            "mileage"
        )

    async def record_maintenance(self, truck_id: str, owner_id: str, last_maintenance: date) -> Truck:
        return await self._mutate(
            truck_id, owner_id,
            lambda truck: truck_lifecycle.record_maintenance(truck, last_maintenance, now=self.clock()),
            "last-maintenance"
        )


class FacilityRecordService(ResourceService[Facility]):
    entity_type = Facility

    async def update_services(self, facility_id: str, owner_id: str, services: List[FacilityService]) -> Facility:
        """Replace the offered services, dropping duplicates."""
        return await self.update(
            facility_id, owner_id, {"services_available": list(dict.fromkeys(services))}
        )


class FuelLogService(ResourceService[FuelLog]):
    entity_type = FuelLog

    def _apply_changes(self, log: FuelLog, changes):
        # Re-price from the pump figures unless a total comes with the edit
        if "total_cost" not in changes and {"gallons_purchased", "price_per_gallon"} & set(changes):
            changes = {**changes, "total_cost": None}
        return super()._apply_changes(log, changes)


class MaintenanceLogService(ResourceService[MaintenanceLog]):
    entity_type = MaintenanceLog


class IncidentReportService(ResourceService[IncidentReport]):
    entity_type = IncidentReport
