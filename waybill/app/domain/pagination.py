"""
Pagination bounds and the paginated envelope shared by every list endpoint.

Bad bounds are clamped, never rejected.
"""

from typing import Generic, List, Optional, Sequence, Tuple, TypeVar
from pydantic import BaseModel

DEFAULT_LIMIT = 10
MAX_LIMIT = 100

T = TypeVar("T")


def normalize_bounds(limit: Optional[int], offset: Optional[int]) -> Tuple[int, int]:
    """
    Clamp a requested page window.

    limit: missing or <= 0 becomes DEFAULT_LIMIT, anything above MAX_LIMIT
    becomes MAX_LIMIT. offset: missing or negative becomes 0.
    """
    if limit is None or limit <= 0:
        limit = DEFAULT_LIMIT
    elif limit > MAX_LIMIT:
        limit = MAX_LIMIT

    if offset is None or offset < 0:
        offset = 0

    return limit, offset


class Page(BaseModel, Generic[T]):
    """Paginated response envelope."""
    items: List[T]
    total: int
    limit: int
    offset: int
    next_offset: Optional[int] = None


def next_offset_for(total: int, limit: int, offset: int) -> Optional[int]:
    end = offset + limit
    return end if end < total else None


def build_envelope(items: Sequence[T], total: int, limit: int, offset: int) -> Page[T]:
    """
    Wrap one page of items.

    `next_offset` is recomputed from the total seen by this query; it is None
    on the last page.
    """
    return Page(
        items=list(items),
        total=total,
        limit=limit,
        offset=offset,
        next_offset=next_offset_for(total, limit, offset),
    )
