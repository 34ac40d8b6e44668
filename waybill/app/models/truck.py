"""
Truck database model.
"""

from sqlalchemy import Column, Integer, String, Float, Date, Enum

from waybill.app.db.session import Base
from waybill.app.domain.enums import FuelType, TrailerType, TruckStatus
from waybill.app.domain.truck import LicensePlate, Truck
from waybill.app.models.mixins import OwnedRowMixin


class TruckModel(OwnedRowMixin, Base):
    """Truck row."""
    __tablename__ = "trucks"

    # Vehicle identification
    truck_number = Column(String(100), nullable=False, index=True)
    vin = Column(String(17), nullable=False, index=True)
    make = Column(String(100), nullable=False, default="")
    model = Column(String(100), nullable=False, default="")
    year = Column(Integer, nullable=False)
    license_plate_number = Column(String(20), nullable=False, default="")
    license_plate_state = Column(String(2), nullable=False, default="")

    mileage = Column(Integer, nullable=False, default=0)

    # Status
    status = Column(Enum(TruckStatus), default=TruckStatus.AVAILABLE, nullable=False, index=True)
    assigned_driver_id = Column(String(32), nullable=True, index=True)

    # Equipment
    trailer_type = Column(Enum(TrailerType), nullable=False, index=True)
    capacity_tons = Column(Float, nullable=False, default=0)
    fuel_type = Column(Enum(FuelType), nullable=False, index=True)
    last_maintenance = Column(Date, nullable=True)

    criterion_columns = {"license_plate.state": "license_plate_state"}

    @classmethod
    def values_from_entity(cls, truck: Truck) -> dict:
        return {
            **cls.base_values(truck),
            "truck_number": truck.truck_number,
            "vin": truck.vin,
            "make": truck.make,
            "model": truck.model,
            "year": truck.year,
            "license_plate_number": truck.license_plate.number,
            "license_plate_state": truck.license_plate.state,
            "mileage": truck.mileage,
            "status": truck.status,
            "assigned_driver_id": truck.assigned_driver_id,
            "trailer_type": truck.trailer_type,
            "capacity_tons": truck.capacity_tons,
            "fuel_type": truck.fuel_type,
            "last_maintenance": truck.last_maintenance,
        }

    def to_entity(self) -> Truck:
        return Truck(
            **self.base_fields(),
            truck_number=self.truck_number,
            vin=self.vin,
            make=self.make,
            model=self.model,
            year=self.year,
            license_plate=LicensePlate(number=self.license_plate_number, state=self.license_plate_state),
            mileage=self.mileage,
            status=self.status,
            assigned_driver_id=self.assigned_driver_id,
            trailer_type=self.trailer_type,
            capacity_tons=self.capacity_tons,
            fuel_type=self.fuel_type,
            last_maintenance=self.last_maintenance,
        )

    def __repr__(self):
        return f"<TruckModel(id={self.id}, number='{self.truck_number}', status='{self.status.value}')>"
