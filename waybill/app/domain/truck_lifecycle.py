"""
Truck operational lifecycle.

    AVAILABLE   -> IN_TRANSIT, RETIRED
    IN_TRANSIT  -> AVAILABLE, MAINTENANCE, RETIRED
    MAINTENANCE -> IN_TRANSIT, RETIRED
    RETIRED is terminal

Besides the status operations, mileage and last maintenance date are the
two fields the fleet updates on their own.
"""

from datetime import date, datetime
from typing import Dict, FrozenSet, Optional

from waybill.app.core.exceptions import ValidationError
from waybill.app.domain.base import utcnow
from waybill.app.domain.enums import TruckStatus
from waybill.app.domain.lifecycle import ensure_transition
from waybill.app.domain.truck import Truck

TRUCK_TRANSITIONS: Dict[TruckStatus, FrozenSet[TruckStatus]] = {
    TruckStatus.AVAILABLE: frozenset({TruckStatus.IN_TRANSIT, TruckStatus.RETIRED}),
    TruckStatus.IN_TRANSIT: frozenset({TruckStatus.AVAILABLE, TruckStatus.MAINTENANCE, TruckStatus.RETIRED}),
    TruckStatus.MAINTENANCE: frozenset({TruckStatus.IN_TRANSIT, TruckStatus.RETIRED}),
    TruckStatus.RETIRED: frozenset(),
}


def _move(truck: Truck, target: TruckStatus, now: Optional[datetime]) -> Truck:
    ensure_transition(TRUCK_TRANSITIONS, truck.status, target, entity="truck")
    truck.status = target
    truck.touch(now or utcnow())
    return truck


def dispatch(truck: Truck, now: Optional[datetime] = None) -> Truck:
    return _move(truck, TruckStatus.IN_TRANSIT, now)


def send_to_maintenance(truck: Truck, now: Optional[datetime] = None) -> Truck:
    return _move(truck, TruckStatus.MAINTENANCE, now)


def make_available(truck: Truck, now: Optional[datetime] = None) -> Truck:
    return _move(truck, TruckStatus.AVAILABLE, now)


def retire(truck: Truck, now: Optional[datetime] = None) -> Truck:
    """Retire the truck for good; it keeps no driver assignment."""
    _move(truck, TruckStatus.RETIRED, now)
    truck.assigned_driver_id = None
    return truck


def update_mileage(truck: Truck, mileage: int, now: Optional[datetime] = None) -> Truck:
    if mileage < truck.mileage:
        raise ValidationError(
            f"mileage cannot decrease (current {truck.mileage}, given {mileage})",
            field="mileage"
        )
    truck.mileage = mileage
    truck.touch(now or utcnow())
    return truck


def record_maintenance(truck: Truck, last_maintenance: date, now: Optional[datetime] = None) -> Truck:
    truck.last_maintenance = last_maintenance
    truck.touch(now or utcnow())
    return truck
