"""
Dict-backed repository.

Honours the same contract as the SQLAlchemy adapter, including owner
scoping and the version check on save. Entities are copied on the way in
and out so callers never share state with storage.
"""

from typing import Any, Dict, List, Optional, Tuple

from waybill.app.core.exceptions import ConflictError, ResourceNotFoundError
from waybill.app.domain.filters import ContainsAll, Criterion, Eq, Range
from waybill.app.repositories.base import E, Repository


def _resolve(entity: Any, field: str) -> Any:
    value = entity
    for part in field.split("."):
        value = getattr(value, part, None)
        if value is None:
            return None
    return value


def _matches(entity: Any, clause) -> bool:
    value = _resolve(entity, clause.field)
    if isinstance(clause, Eq):
        return value == clause.value
    if isinstance(clause, Range):
        if value is None:
            return False
        if clause.minimum is not None and value < clause.minimum:
            return False
        if clause.maximum is not None and value > clause.maximum:
            return False
        return True
    if isinstance(clause, ContainsAll):
        present = set(value or ())
        return all(wanted in present for wanted in clause.values)
    raise TypeError(f"Unsupported clause: {clause!r}")


class InMemoryRepository(Repository[E]):

    def __init__(self, resource_name: str = "Resource"):
        self.resource_name = resource_name
        self._rows: Dict[str, E] = {}

    async def find_by_id(self, entity_id: str, owner_id: str) -> Optional[E]:
        row = self._rows.get(entity_id)
        if row is None or row.owner_id != owner_id:
            return None
        return row.model_copy(deep=True)

    async def add(self, entity: E) -> E:
        self._rows[entity.id] = entity.model_copy(deep=True)
        return entity

    async def save(self, entity: E) -> E:
        stored = self._rows.get(entity.id)
        if stored is None or stored.owner_id != entity.owner_id:
            raise ResourceNotFoundError(self.resource_name, entity.id)
        if stored.version != entity.version:
            raise ConflictError(self.resource_name, entity.id, expected_version=entity.version)

        saved = entity.model_copy(update={"version": entity.version + 1}, deep=True)
        self._rows[entity.id] = saved
        return saved.model_copy(deep=True)

    async def delete_by_id(self, entity_id: str, owner_id: str) -> None:
        stored = self._rows.get(entity_id)
        if stored is None or stored.owner_id != owner_id:
            raise ResourceNotFoundError(self.resource_name, entity_id)
        del self._rows[entity_id]

    async def query(self, criterion: Criterion, limit: int, offset: int) -> Tuple[List[E], int]:
        clauses = criterion.all_clauses()
        matched = [
            row for row in self._rows.values()
            if all(_matches(row, clause) for clause in clauses)
        ]
        matched.sort(key=lambda row: (row.created_at, row.id), reverse=True)
        page = matched[offset:offset + limit]
        return [row.model_copy(deep=True) for row in page], len(matched)
