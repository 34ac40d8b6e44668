"""
Driver entity.
"""

from datetime import date
from typing import ClassVar, FrozenSet, Optional
from pydantic import BaseModel, Field

from waybill.app.domain.base import OwnedEntity, ReferenceId
from waybill.app.domain.enums import EmploymentStatus


class Address(BaseModel):
    street: str = Field("", max_length=255)
    city: str = Field("", max_length=100)
    state: str = Field("", max_length=50)
    zip: str = Field("", max_length=20)


class Driver(OwnedEntity):
    """
    A driver employed by the owner.

    `employment_status` is driven by the driver lifecycle operations
    (suspend, reinstate, terminate) only.
    """
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    dob: Optional[date] = None
    license_number: str = Field(..., max_length=50)
    license_state: str = Field(..., min_length=2, max_length=2)
    license_expiration: Optional[date] = None
    phone: str = Field("", max_length=50)
    email: str = Field("", max_length=255)
    address: Address = Field(default_factory=Address)
    employment_status: EmploymentStatus = EmploymentStatus.ACTIVE
    assigned_truck_id: Optional[ReferenceId] = None

    protected_fields: ClassVar[FrozenSet[str]] = OwnedEntity.protected_fields | {"employment_status"}

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
