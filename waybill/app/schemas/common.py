"""
Base request schemas.

Create bodies turn into domain entities owned by the caller; update bodies
carry only the fields the client actually sent.
"""

from typing import Any, ClassVar, Dict
from pydantic import BaseModel


class EntityCreate(BaseModel):
    """Body of a create request."""
    entity_type: ClassVar = None

    def to_entity(self, owner_id: str):
        return self.entity_type(owner_id=owner_id, **self.model_dump())


class EntityUpdate(BaseModel):
    """Body of a partial update. Unknown fields are rejected."""

    class Config:
        extra = "forbid"

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)
