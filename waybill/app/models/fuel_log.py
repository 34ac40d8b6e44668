"""
Fuel log database model.
"""

from sqlalchemy import Column, Integer, String, Float, Date

from waybill.app.db.session import Base
from waybill.app.domain.records import FuelLog
from waybill.app.models.mixins import OwnedRowMixin


class FuelLogModel(OwnedRowMixin, Base):
    """Fuel purchase row."""
    __tablename__ = "fuel_logs"

    truck_id = Column(String(32), nullable=False, index=True)
    driver_id = Column(String(32), nullable=True, index=True)
    date = Column(Date, nullable=False)

    gallons_purchased = Column(Float, nullable=False)
    price_per_gallon = Column(Float, nullable=False)
    total_cost = Column(Float, nullable=False)

    location = Column(String(255), nullable=False, default="")
    odometer_reading = Column(Integer, nullable=False, default=0)

    @classmethod
    def values_from_entity(cls, log: FuelLog) -> dict:
        return {
            **cls.base_values(log),
            "truck_id": log.truck_id,
            "driver_id": log.driver_id,
            "date": log.date,
            "gallons_purchased": log.gallons_purchased,
            "price_per_gallon": log.price_per_gallon,
            "total_cost": log.total_cost,
            "location": log.location,
            "odometer_reading": log.odometer_reading,
        }

    def to_entity(self) -> FuelLog:
        return FuelLog(
            **self.base_fields(),
            truck_id=self.truck_id,
            driver_id=self.driver_id,
            date=self.date,
            gallons_purchased=self.gallons_purchased,
            price_per_gallon=self.price_per_gallon,
            total_cost=self.total_cost,
            location=self.location,
            odometer_reading=self.odometer_reading,
        )
