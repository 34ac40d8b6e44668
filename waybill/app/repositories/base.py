"""
Repository contract consumed by the resource services.

Every lookup is keyed by id AND owner id. A row that exists under another
owner is indistinguishable from a missing one.
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, Tuple, TypeVar

from waybill.app.domain.base import OwnedEntity
from waybill.app.domain.filters import Criterion

E = TypeVar("E", bound=OwnedEntity)


class Repository(ABC, Generic[E]):
    """Persistence boundary for one resource type."""

    resource_name: str = "Resource"

    @abstractmethod
    async def find_by_id(self, entity_id: str, owner_id: str) -> Optional[E]:
        """Return the entity matching id + owner, or None."""

    @abstractmethod
    async def add(self, entity: E) -> E:
        """Insert a new entity."""

    @abstractmethod
    async def save(self, entity: E) -> E:
        """
        Write back a previously read entity.

        The write only applies if storage still holds `entity.version`.

        Returns:
            The stored entity with its version bumped

        Raises:
            ResourceNotFoundError: No row matches id + owner
            ConflictError: The row exists but was changed since it was read
        """

    @abstractmethod
    async def delete_by_id(self, entity_id: str, owner_id: str) -> None:
        """
        Delete the row matching id + owner.

        Raises:
            ResourceNotFoundError: Nothing was deleted
        """

    @abstractmethod
    async def query(self, criterion: Criterion, limit: int, offset: int) -> Tuple[List[E], int]:
        """Return one page of matching entities (newest first) and the total match count."""
