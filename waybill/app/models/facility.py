"""
Facility database model.
"""

from sqlalchemy import Column, Integer, String, JSON

from waybill.app.db.session import Base
from waybill.app.domain.driver import Address
from waybill.app.domain.records import ContactInfo, Facility
from waybill.app.models.mixins import OwnedRowMixin


class FacilityModel(OwnedRowMixin, Base):
    """Facility row. Offered services are stored as a JSON list of codes."""
    __tablename__ = "facilities"

    facility_number = Column(String(100), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    type = Column(String(100), nullable=False, default="", index=True)

    # Address
    address_street = Column(String(255), nullable=False, default="")
    address_city = Column(String(100), nullable=False, default="")
    address_state = Column(String(50), nullable=False, default="", index=True)
    address_zip = Column(String(20), nullable=False, default="")

    # Contact
    contact_phone = Column(String(50), nullable=False, default="")
    contact_email = Column(String(255), nullable=False, default="")

    parking_capacity = Column(Integer, nullable=False, default=0)
    services_available = Column(JSON, nullable=False, default=list)

    criterion_columns = {"address.state": "address_state"}

    @classmethod
    def values_from_entity(cls, facility: Facility) -> dict:
        return {
            **cls.base_values(facility),
            "facility_number": facility.facility_number,
            "name": facility.name,
            "type": facility.type,
            "address_street": facility.address.street,
            "address_city": facility.address.city,
            "address_state": facility.address.state,
            "address_zip": facility.address.zip,
            "contact_phone": facility.contact_info.phone,
            "contact_email": facility.contact_info.email,
            "parking_capacity": facility.parking_capacity,
            "services_available": [service.value for service in facility.services_available],
        }

    def to_entity(self) -> Facility:
        return Facility(
            **self.base_fields(),
            facility_number=self.facility_number,
            name=self.name,
            type=self.type,
            address=Address(
                street=self.address_street,
                city=self.address_city,
                state=self.address_state,
                zip=self.address_zip,
            ),
            contact_info=ContactInfo(phone=self.contact_phone, email=self.contact_email),
            parking_capacity=self.parking_capacity,
            services_available=list(self.services_available or []),
        )

    def __repr__(self):
        return f"<FacilityModel(id={self.id}, name='{self.name}')>"
