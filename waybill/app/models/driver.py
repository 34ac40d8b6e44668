"""
Driver database model.
"""

from sqlalchemy import Column, String, Date, Enum

from waybill.app.db.session import Base
from waybill.app.domain.driver import Address, Driver
from waybill.app.domain.enums import EmploymentStatus
from waybill.app.models.mixins import OwnedRowMixin


class DriverModel(OwnedRowMixin, Base):
    """Driver row."""
    __tablename__ = "drivers"

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    dob = Column(Date, nullable=True)

    # License
    license_number = Column(String(50), nullable=False)
    license_state = Column(String(2), nullable=False, index=True)
    license_expiration = Column(Date, nullable=True)

    # Contact
    phone = Column(String(50), nullable=False, default="")
    email = Column(String(255), nullable=False, default="")
    address_street = Column(String(255), nullable=False, default="")
    address_city = Column(String(100), nullable=False, default="")
    address_state = Column(String(50), nullable=False, default="")
    address_zip = Column(String(20), nullable=False, default="")

    employment_status = Column(Enum(EmploymentStatus), default=EmploymentStatus.ACTIVE, nullable=False, index=True)
    assigned_truck_id = Column(String(32), nullable=True, index=True)

    criterion_columns = {"address.state": "address_state"}

    @classmethod
    def values_from_entity(cls, driver: Driver) -> dict:
        return {
            **cls.base_values(driver),
            "first_name": driver.first_name,
            "last_name": driver.last_name,
            "dob": driver.dob,
            "license_number": driver.license_number,
            "license_state": driver.license_state,
            "license_expiration": driver.license_expiration,
            "phone": driver.phone,
            "email": driver.email,
            "address_street": driver.address.street,
            "address_city": driver.address.city,
            "address_state": driver.address.state,
            "address_zip": driver.address.zip,
            "employment_status": driver.employment_status,
            "assigned_truck_id": driver.assigned_truck_id,
        }

    def to_entity(self) -> Driver:
        return Driver(
            **self.base_fields(),
            first_name=self.first_name,
            last_name=self.last_name,
            dob=self.dob,
            license_number=self.license_number,
            license_state=self.license_state,
            license_expiration=self.license_expiration,
            phone=self.phone,
            email=self.email,
            address=Address(
                street=self.address_street,
                city=self.address_city,
                state=self.address_state,
                zip=self.address_zip,
            ),
            employment_status=self.employment_status,
            assigned_truck_id=self.assigned_truck_id,
        )

    def __repr__(self):
        return f"<DriverModel(id={self.id}, name='{self.first_name} {self.last_name}', status='{self.employment_status.value}')>"
