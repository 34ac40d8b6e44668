"""
Incident report database model.
"""

from sqlalchemy import Column, String, Float, Date, Enum, Text

from waybill.app.db.session import Base
from waybill.app.domain.enums import IncidentType
from waybill.app.domain.records import IncidentReport
from waybill.app.models.mixins import OwnedRowMixin


class IncidentReportModel(OwnedRowMixin, Base):
    """Incident row. Trip, truck and driver are optional references."""
    __tablename__ = "incident_reports"

    trip_id = Column(String(32), nullable=True, index=True)
    truck_id = Column(String(32), nullable=True, index=True)
    driver_id = Column(String(32), nullable=True, index=True)

    type = Column(Enum(IncidentType), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    date = Column(Date, nullable=False)
    location = Column(String(255), nullable=False, default="")
    damage_estimate = Column(Float, nullable=False, default=0)

    @classmethod
    def values_from_entity(cls, report: IncidentReport) -> dict:
        return {
            **cls.base_values(report),
            "trip_id": report.trip_id,
            "truck_id": report.truck_id,
            "driver_id": report.driver_id,
            "type": report.type,
            "description": report.description,
            "date": report.date,
            "location": report.location,
            "damage_estimate": report.damage_estimate,
        }

    def to_entity(self) -> IncidentReport:
        return IncidentReport(
            **self.base_fields(),
            trip_id=self.trip_id,
            truck_id=self.truck_id,
            driver_id=self.driver_id,
            type=self.type,
            description=self.description,
            date=self.date,
            location=self.location,
            damage_estimate=self.damage_estimate,
        )

    def __repr__(self):
        return f"<IncidentReportModel(id={self.id}, type='{self.type.value}')>"
