"""
Fleet domain enumerations.
"""

import enum


class TripStatus(str, enum.Enum):
    """Trip status enumeration."""
    SCHEDULED = "SCHEDULED"  # Created, not yet departed
    IN_TRANSIT = "IN_TRANSIT"  # Departed, not yet arrived
    COMPLETED = "COMPLETED"  # Delivered
    FAILED_DELIVERY = "FAILED_DELIVERY"  # Arrived without delivering
    CANCELED = "CANCELED"  # Canceled before departure


class EmploymentStatus(str, enum.Enum):
    """Driver employment status enumeration."""
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    TERMINATED = "TERMINATED"


class TruckStatus(str, enum.Enum):
    """Truck operational status enumeration."""
    AVAILABLE = "AVAILABLE"
    IN_TRANSIT = "IN_TRANSIT"
    MAINTENANCE = "MAINTENANCE"
    RETIRED = "RETIRED"


class TrailerType(str, enum.Enum):
    DRY_VAN = "DRY_VAN"
    REEFER = "REEFER"
    FLATBED = "FLATBED"
    TANKER = "TANKER"
    STEP_DECK = "STEP_DECK"


class FuelType(str, enum.Enum):
    DIESEL = "DIESEL"
    GASOLINE = "GASOLINE"
    ELECTRIC = "ELECTRIC"
    HYBRID = "HYBRID"
    CNG = "CNG"
    LNG = "LNG"


class FacilityService(str, enum.Enum):
    """Services a facility can offer."""
    FUEL = "FUEL"
    REPAIRS = "REPAIRS"
    LOADING_UNLOADING = "LOADING_UNLOADING"
    LODGING = "LODGING"
    WASHING = "WASHING"
    PARKING = "PARKING"
    WEIGH_STATION = "WEIGH_STATION"


class IncidentType(str, enum.Enum):
    ACCIDENT = "ACCIDENT"
    BREAKDOWN = "BREAKDOWN"
    THEFT = "THEFT"
    CARGO_DAMAGE = "CARGO_DAMAGE"
    TRAFFIC_VIOLATION = "TRAFFIC_VIOLATION"
    OTHER = "OTHER"
