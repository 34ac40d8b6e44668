"""
Maintenance log database model.
"""

from sqlalchemy import Column, String, Float, Date, Text

from waybill.app.db.session import Base
from waybill.app.domain.records import MaintenanceLog
from waybill.app.models.mixins import OwnedRowMixin


class MaintenanceLogModel(OwnedRowMixin, Base):
    __tablename__ = "maintenance_logs"

    truck_id = Column(String(32), nullable=False, index=True)
    date = Column(Date, nullable=False)
    service_type = Column(String(100), nullable=False, index=True)
    cost = Column(Float, nullable=False, default=0)
    notes = Column(Text, nullable=False, default="")
    mechanic = Column(String(255), nullable=False, default="")
    location = Column(String(255), nullable=False, default="")

    @classmethod
    def values_from_entity(cls, log: MaintenanceLog) -> dict:
        return {
            **cls.base_values(log),
            "truck_id": log.truck_id,
            "date": log.date,
            "service_type": log.service_type,
            "cost": log.cost,
            "notes": log.notes,
            "mechanic": log.mechanic,
            "location": log.location,
        }

    def to_entity(self) -> MaintenanceLog:
        return MaintenanceLog(
            **self.base_fields(),
            truck_id=self.truck_id,
            date=self.date,
            service_type=self.service_type,
            cost=self.cost,
            notes=self.notes,
            mechanic=self.mechanic,
            location=self.location,
        )
