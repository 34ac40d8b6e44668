"""
Query criteria and per-resource list filters.

A Criterion is a storage-independent predicate: the owner constraint plus a
sequence of clauses. Repositories translate it into their own query form.
The owner constraint is a required constructor argument, so no list query
can be built without it.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Union
from pydantic import BaseModel

from waybill.app.domain.enums import (
    EmploymentStatus, FacilityService, FuelType, IncidentType, TrailerType, TripStatus, TruckStatus,
)

OWNER_FIELD = "owner_id"


@dataclass(frozen=True)
class Eq:
    """Exact match on a field."""
    field: str
    value: Any


@dataclass(frozen=True)
class Range:
    """Two-sided inclusive bound; either side may be open."""
    field: str
    minimum: Optional[Any] = None
    maximum: Optional[Any] = None


@dataclass(frozen=True)
class ContainsAll:
    """A list field contains every one of `values`."""
    field: str
    values: Tuple[Any, ...]


Clause = Union[Eq, Range, ContainsAll]


@dataclass(frozen=True)
class Criterion:
    owner_id: str
    clauses: Tuple[Clause, ...] = ()

    @classmethod
    def owned_by(cls, owner_id: str) -> "Criterion":
        return cls(owner_id=owner_id)

    def where(self, *clauses: Clause) -> "Criterion":
        return Criterion(owner_id=self.owner_id, clauses=self.clauses + tuple(clauses))

    def all_clauses(self) -> Tuple[Clause, ...]:
        """Owner clause first, then the optional filter clauses."""
        return (Eq(OWNER_FIELD, self.owner_id),) + self.clauses


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    if isinstance(value, (list, tuple, set, frozenset)):
        return len(value) > 0
    return True


class ListFilter(BaseModel):
    """
    Base for list filters.

    `equality_fields` maps a filter attribute onto the entity field it
    constrains. Attributes left unset add no clause.
    """
    equality_fields: ClassVar[Dict[str, str]] = {}

    def clauses(self) -> List[Clause]:
        result: List[Clause] = []
        for attr, entity_field in self.equality_fields.items():
            value = getattr(self, attr)
            if _present(value):
                if isinstance(value, str):
                    value = value.strip()
                result.append(Eq(entity_field, value))
        return result


class TripFilter(ListFilter):
    status: Optional[TripStatus] = None
    driver_id: Optional[str] = None
    truck_id: Optional[str] = None
    start_facility_id: Optional[str] = None
    end_facility_id: Optional[str] = None

    equality_fields: ClassVar[Dict[str, str]] = {
        "status": "status",
        "driver_id": "driver_id",
        "truck_id": "truck_id",
        "start_facility_id": "start_facility_id",
        "end_facility_id": "end_facility_id",
    }


class DriverFilter(ListFilter):
    license_state: Optional[str] = None
    employment_status: Optional[EmploymentStatus] = None
    assigned_truck_id: Optional[str] = None

    equality_fields: ClassVar[Dict[str, str]] = {
        "license_state": "license_state",
        "employment_status": "employment_status",
        "assigned_truck_id": "assigned_truck_id",
    }


class TruckFilter(ListFilter):
    vin: Optional[str] = None
    status: Optional[TruckStatus] = None
    assigned_driver_id: Optional[str] = None
    trailer_type: Optional[TrailerType] = None
    fuel_type: Optional[FuelType] = None

    equality_fields: ClassVar[Dict[str, str]] = {
        "vin": "vin",
        "status": "status",
        "assigned_driver_id": "assigned_driver_id",
        "trailer_type": "trailer_type",
        "fuel_type": "fuel_type",
    }


class FacilityFilter(ListFilter):
    state_code: Optional[str] = None
    type: Optional[str] = None
    services: List[FacilityService] = []
    min_capacity: Optional[int] = None
    max_capacity: Optional[int] = None

    equality_fields: ClassVar[Dict[str, str]] = {
        "state_code": "address.state",
        "type": "type",
    }

    def clauses(self) -> List[Clause]:
        result = super().clauses()
        if self.services:
            # Deduplicate, keep request order
            result.append(ContainsAll("services_available", tuple(dict.fromkeys(self.services))))
        if self.min_capacity is not None or self.max_capacity is not None:
            result.append(Range("parking_capacity", self.min_capacity, self.max_capacity))
        return result


class FuelLogFilter(ListFilter):
    truck_id: Optional[str] = None
    driver_id: Optional[str] = None

    equality_fields: ClassVar[Dict[str, str]] = {
        "truck_id": "truck_id",
        "driver_id": "driver_id",
    }


class MaintenanceLogFilter(ListFilter):
    truck_id: Optional[str] = None
    service_type: Optional[str] = None

    equality_fields: ClassVar[Dict[str, str]] = {
        "truck_id": "truck_id",
        "service_type": "service_type",
    }


class IncidentReportFilter(ListFilter):
    trip_id: Optional[str] = None
    truck_id: Optional[str] = None
    driver_id: Optional[str] = None
    type: Optional[IncidentType] = None

    equality_fields: ClassVar[Dict[str, str]] = {
        "trip_id": "trip_id",
        "truck_id": "truck_id",
        "driver_id": "driver_id",
        "type": "type",
    }


def build_criterion(owner_id: str, list_filter: Optional[ListFilter] = None) -> Criterion:
    """
    Build the owner-scoped criterion for a list query.

    Args:
        owner_id: Authenticated owner; always constrained
        list_filter: Optional filter; only fields that are present add clauses

    Returns:
        Criterion carrying the owner constraint and one clause per present field
    """
    criterion = Criterion.owned_by(owner_id)
    if list_filter is None:
        return criterion
    return criterion.where(*list_filter.clauses())
