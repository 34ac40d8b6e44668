"""
Driver employment lifecycle.

    ACTIVE    -> SUSPENDED, TERMINATED
    SUSPENDED -> ACTIVE, TERMINATED
    TERMINATED is terminal
"""

from datetime import datetime
from typing import Dict, FrozenSet, Optional

from waybill.app.domain.base import utcnow
from waybill.app.domain.driver import Driver
from waybill.app.domain.enums import EmploymentStatus
from waybill.app.domain.lifecycle import ensure_transition

DRIVER_TRANSITIONS: Dict[EmploymentStatus, FrozenSet[EmploymentStatus]] = {
    EmploymentStatus.ACTIVE: frozenset({EmploymentStatus.SUSPENDED, EmploymentStatus.TERMINATED}),
    EmploymentStatus.SUSPENDED: frozenset({EmploymentStatus.ACTIVE, EmploymentStatus.TERMINATED}),
    EmploymentStatus.TERMINATED: frozenset(),
}


def _move(driver: Driver, target: EmploymentStatus, now: Optional[datetime]) -> Driver:
    ensure_transition(DRIVER_TRANSITIONS, driver.employment_status, target, entity="driver")
    driver.employment_status = target
    driver.touch(now or utcnow())
    return driver


def suspend(driver: Driver, now: Optional[datetime] = None) -> Driver:
    return _move(driver, EmploymentStatus.SUSPENDED, now)


def reinstate(driver: Driver, now: Optional[datetime] = None) -> Driver:
    return _move(driver, EmploymentStatus.ACTIVE, now)


def terminate(driver: Driver, now: Optional[datetime] = None) -> Driver:
    """Terminate employment; a terminated driver also loses the truck assignment."""
    _move(driver, EmploymentStatus.TERMINATED, now)
    driver.assigned_truck_id = None
    return driver
