"""
Shared shape of every tenant-owned record.
"""

import uuid
from datetime import datetime, timezone
from typing import Annotated, ClassVar, FrozenSet
from pydantic import BaseModel, Field

# Widths of the id and owner columns
ID_LENGTH = 32
OWNER_ID_LENGTH = 64

# Id of another record held as a reference
ReferenceId = Annotated[str, Field(max_length=ID_LENGTH)]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return uuid.uuid4().hex


class OwnedEntity(BaseModel):
    """
    Base for all records scoped to an owner (tenant).

    `owner_id` is fixed at creation. `version` is the optimistic concurrency
    token: the repository only accepts a save whose version matches storage
    and hands back the entity with the version bumped.
    """
    id: str = Field(default_factory=new_id)
    owner_id: str = Field(..., min_length=1, max_length=OWNER_ID_LENGTH)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    version: int = 1

    # Fields no generic update may touch
    protected_fields: ClassVar[FrozenSet[str]] = frozenset({"id", "owner_id", "created_at", "updated_at", "version"})

    def touch(self, now: datetime = None) -> None:
        """Bump updated_at."""
        self.updated_at = now or utcnow()
