"""
Columns and mapping helpers shared by every owner-scoped table.
"""

from typing import Any, Dict, Iterable
from sqlalchemy import Column, Integer, String

from waybill.app.db.types import UTCDateTime

# Columns a save never rewrites
IMMUTABLE_COLUMNS = frozenset({"id", "owner_id", "created_at"})


class OwnedRowMixin:
    """
    Identity, ownership, timestamps and version for a domain record row.

    Subclasses implement `values_from_entity` / `to_entity`, and may map
    dotted domain field names (used in list criteria) onto flat columns
    through `criterion_columns`.
    """

    id = Column(String(32), primary_key=True)

    # Ownership - record belongs to the authenticated owner (tenant)
    owner_id = Column(String(64), nullable=False, index=True)

    created_at = Column(UTCDateTime(), nullable=False, index=True)
    updated_at = Column(UTCDateTime(), nullable=False)

    # Optimistic concurrency token
    version = Column(Integer, nullable=False, default=1)

    criterion_columns = {}

    @classmethod
    def column_for(cls, field_name: str):
        """Resolve a domain field name used in a criterion to a mapped column."""
        column_name = cls.criterion_columns.get(field_name, field_name)
        column = getattr(cls, column_name, None)
        if column is None:
            raise KeyError(f"{cls.__name__} has no column for field '{field_name}'")
        return column

    @staticmethod
    def base_values(entity) -> Dict[str, Any]:
        return {
            "id": entity.id,
            "owner_id": entity.owner_id,
            "created_at": entity.created_at,
            "updated_at": entity.updated_at,
            "version": entity.version,
        }

    def base_fields(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "version": self.version,
        }


def mutable_values(values: Dict[str, Any], skip: Iterable[str] = IMMUTABLE_COLUMNS) -> Dict[str, Any]:
    skip = set(skip)
    return {k: v for k, v in values.items() if k not in skip}
