"""
SQLAlchemy implementation of the repository contract.

One subclass per resource binds the ORM model. Criteria are translated into
SQL here and nowhere else; every storage failure leaves this module as a
RepositoryError.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, List, Optional, Tuple

from sqlalchemy import String, cast, delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from waybill.app.core.exceptions import ConflictError, RepositoryError, ResourceNotFoundError
from waybill.app.domain.filters import ContainsAll, Criterion, Eq, Range
from waybill.app.models.driver import DriverModel
from waybill.app.models.facility import FacilityModel
from waybill.app.models.fuel_log import FuelLogModel
from waybill.app.models.incident_report import IncidentReportModel
from waybill.app.models.maintenance_log import MaintenanceLogModel
from waybill.app.models.mixins import mutable_values
from waybill.app.models.trip import TripModel
from waybill.app.models.truck import TruckModel
from waybill.app.repositories.base import E, Repository

logger = logging.getLogger("waybill.repository")


def _scalar(value: Any) -> Any:
    return getattr(value, "value", value)


class SqlAlchemyRepository(Repository[E]):
    """Owner-scoped CRUD and criterion queries over one ORM model."""

    model = None

    def __init__(self, session: AsyncSession):
        self.session = session

    @asynccontextmanager
    async def _guard(self, operation: str):
        try:
            yield
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                f"{self.resource_name} {operation} failed",
                extra={"error": str(e)}
            )
            raise RepositoryError(f"{self.resource_name} {operation} failed", cause=e) from e

    def _owned(self, entity_id: str, owner_id: str):
        return (self.model.id == entity_id, self.model.owner_id == owner_id)

    async def find_by_id(self, entity_id: str, owner_id: str) -> Optional[E]:
        async with self._guard("lookup"):
            result = await self.session.execute(
                select(self.model)
                .where(*self._owned(entity_id, owner_id))
                .execution_options(populate_existing=True)
            )
            row = result.scalar_one_or_none()
        return row.to_entity() if row else None

    async def add(self, entity: E) -> E:
        async with self._guard("insert"):
            self.session.add(self.model(**self.model.values_from_entity(entity)))
            await self.session.commit()
        return entity

    async def save(self, entity: E) -> E:
        values = mutable_values(self.model.values_from_entity(entity))
        values["version"] = entity.version + 1

        async with self._guard("update"):
            result = await self.session.execute(
                update(self.model)
                .where(
                    *self._owned(entity.id, entity.owner_id),
                    self.model.version == entity.version,
                )
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                await self.session.rollback()
                exists = await self.session.execute(
                    select(self.model.id).where(*self._owned(entity.id, entity.owner_id))
                )
                if exists.scalar_one_or_none() is None:
                    raise ResourceNotFoundError(self.resource_name, entity.id)
                raise ConflictError(self.resource_name, entity.id, expected_version=entity.version)
            await self.session.commit()

        return entity.model_copy(update={"version": entity.version + 1})

    async def delete_by_id(self, entity_id: str, owner_id: str) -> None:
        async with self._guard("delete"):
            result = await self.session.execute(
                delete(self.model)
                .where(*self._owned(entity_id, owner_id))
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                await self.session.rollback()
                raise ResourceNotFoundError(self.resource_name, entity_id)
            await self.session.commit()

    def _condition(self, clause):
        column = self.model.column_for(clause.field)
        if isinstance(clause, Eq):
            return [column == clause.value]
        if isinstance(clause, Range):
            conditions = []
            if clause.minimum is not None:
                conditions.append(column >= clause.minimum)
            if clause.maximum is not None:
                conditions.append(column <= clause.maximum)
            return conditions
        if isinstance(clause, ContainsAll):
            # JSON list of codes; each code appears quoted in the stored text
            text = cast(column, String)
            return [text.like(f'%"{_scalar(value)}"%') for value in clause.values]
        raise TypeError(f"Unsupported clause: {clause!r}")

    def _conditions(self, criterion: Criterion) -> List:
        conditions = []
        for clause in criterion.all_clauses():
            conditions.extend(self._condition(clause))
        return conditions

    async def query(self, criterion: Criterion, limit: int, offset: int) -> Tuple[List[E], int]:
        conditions = self._conditions(criterion)

        async with self._guard("query"):
            total = await self.session.scalar(
                select(func.count()).select_from(self.model).where(*conditions)
            )
            result = await self.session.execute(
                select(self.model)
                .where(*conditions)
                .order_by(self.model.created_at.desc(), self.model.id.desc())
                .offset(offset)
                .limit(limit)
                .execution_options(populate_existing=True)
            )
            rows = result.scalars().all()

        return [row.to_entity() for row in rows], total or 0


class TripRepository(SqlAlchemyRepository):
    model = TripModel
    resource_name = "Trip"


class DriverRepository(SqlAlchemyRepository):
    model = DriverModel
    resource_name = "Driver"


class TruckRepository(SqlAlchemyRepository):
    model = TruckModel
    resource_name = "Truck"


class FacilityRepository(SqlAlchemyRepository):
    model = FacilityModel
    resource_name = "Facility"


class FuelLogRepository(SqlAlchemyRepository):
    model = FuelLogModel
    resource_name = "Fuel log"


class MaintenanceLogRepository(SqlAlchemyRepository):
    model = MaintenanceLogModel
    resource_name = "Maintenance log"


class IncidentReportRepository(SqlAlchemyRepository):
    model = IncidentReportModel
    resource_name = "Incident report"
