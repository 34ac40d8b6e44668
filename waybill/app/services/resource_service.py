"""
Resource Service.

The only layer that talks to a repository. Every read and write is scoped to
the calling owner; a record owned by someone else is reported exactly like a
missing one.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Generic, Optional

import pydantic

from waybill.app.core.config import settings
from waybill.app.core.exceptions import ResourceNotFoundError, StateTransitionError, ValidationError
from waybill.app.core.reliability import retry_on_conflict
from waybill.app.domain.base import new_id, utcnow
from waybill.app.domain.filters import ListFilter, build_criterion
from waybill.app.domain.pagination import Page, build_envelope, normalize_bounds
from waybill.app.repositories.base import E, Repository

logger = logging.getLogger("waybill.services")


class ResourceService(Generic[E]):
    """
    Create, read, edit, delete and list one resource type.

    Lifecycle-bearing subclasses add one method per named transition, built
    on `_mutate`, which runs the whole read-change-save cycle and repeats it
    when the save loses a version race.
    """

    entity_type = None
    status_field = "status"

    def __init__(
        self,
        repository: Repository[E],
        max_retries: Optional[int] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.repository = repository
        self.max_retries = max_retries if max_retries is not None else settings.transition_max_retries
        self.clock = clock

    @property
    def resource_name(self) -> str:
        return self.repository.resource_name

    def _prepare_new(self, entity: E) -> E:
        return entity

    async def create(self, owner_id: str, entity: E) -> E:
        """
        Store a new record under `owner_id`.

        Identity, ownership, timestamps and version are assigned here; whatever
        the caller put in those fields is discarded.
        """
        now = self.clock()
        entity = entity.model_copy(update={
            "id": new_id(),
            "owner_id": owner_id,
            "created_at": now,
            "updated_at": now,
            "version": 1,
        })
        entity = self._prepare_new(entity)
        created = await self.repository.add(entity)
        logger.info(
            f"{self.resource_name} created",
            extra={"id": created.id, "owner_id": owner_id}
        )
        return created

    async def get_by_id(self, entity_id: str, owner_id: str) -> E:
        """
        Raises:
            ResourceNotFoundError: No record matches id + owner
        """
        entity = await self.repository.find_by_id(entity_id, owner_id)
        if entity is None:
            raise ResourceNotFoundError(self.resource_name, entity_id)
        return entity

    def _apply_changes(self, entity: E, changes: Dict[str, Any]) -> E:
        merged = {**entity.model_dump(), **changes}
        try:
            updated = type(entity).model_validate(merged)
        except pydantic.ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"])
            raise ValidationError(f"{field}: {error['msg']}", field=field) from e
        updated.touch(self.clock())
        return updated

    async def update(self, entity_id: str, owner_id: str, changes: Dict[str, Any]) -> E:
        """
        Edit plain fields of a record.

        Args:
            entity_id: Record id
            owner_id: Calling owner
            changes: Field name to new value; status and other lifecycle
                owned fields are refused

        Raises:
            ValidationError: A change names a protected field
            ResourceNotFoundError: No record matches id + owner
        """
        refused = sorted(set(changes) & self.entity_type.protected_fields)
        if refused:
            raise ValidationError(
                f"fields cannot be updated directly: {', '.join(refused)}",
                field=refused[0]
            )

        return await self._mutate(
            entity_id, owner_id, lambda entity: self._apply_changes(entity, changes), "update"
        )

    async def delete(self, entity_id: str, owner_id: str) -> None:
        await self.repository.delete_by_id(entity_id, owner_id)
        logger.info(
            f"{self.resource_name} deleted",
            extra={"id": entity_id, "owner_id": owner_id}
        )

    async def list(
        self,
        owner_id: str,
        list_filter: Optional[ListFilter] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Page:
        """Return one owner-scoped page; bad bounds are clamped."""
        limit, offset = normalize_bounds(limit, offset)
        criterion = build_criterion(owner_id, list_filter)
        items, total = await self.repository.query(criterion, limit, offset)
        return build_envelope(items, total, limit, offset)

    async def _mutate(self, entity_id: str, owner_id: str, change: Callable[[E], Optional[E]], action: str) -> E:
        """
        Read, change and save one record.

        `change` either mutates the entity in place or returns a replacement.
        A rejected transition propagates before anything is saved.
        """
        async def attempt():
            entity = await self.get_by_id(entity_id, owner_id)
            previous = getattr(entity, self.status_field, None)
            try:
                changed = change(entity)
            except StateTransitionError as e:
                logger.warning(
                    f"{self.resource_name} {action} rejected",
                    extra={"id": entity_id, "owner_id": owner_id, **e.details}
                )
                raise
            saved = await self.repository.save(changed if changed is not None else entity)
            return previous, saved

        previous, saved = await retry_on_conflict(attempt, self.max_retries)
        logger.info(
            f"{self.resource_name} {action}",
            extra={
                "id": entity_id,
                "owner_id": owner_id,
                "from_status": getattr(previous, "value", previous),
                "to_status": getattr(getattr(saved, self.status_field, None), "value", None),
                "version": saved.version,
            }
        )
        return saved
