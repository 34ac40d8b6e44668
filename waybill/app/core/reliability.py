"""
Reliability Utilities.

Bounded retry for optimistic-concurrency conflicts on read-modify-write
cycles. Nothing else in the core retries.
"""

import logging
from typing import Awaitable, Callable, TypeVar

from waybill.app.core.exceptions import ConflictError

logger = logging.getLogger("waybill.reliability")

T = TypeVar("T")


async def retry_on_conflict(operation: Callable[[], Awaitable[T]], attempts: int) -> T:
    """
    Run `operation` until it completes without a ConflictError.

    The operation must redo its read on every call; it is the whole
    read-transition-write cycle, not just the write.

    Args:
        operation: Zero-argument coroutine function
        attempts: Maximum number of calls (values below 1 mean one call)

    Returns:
        Whatever the first successful call returns

    Raises:
        ConflictError: If every attempt hit a conflict
        Any other exception raised by the operation, unchanged, on first occurrence
    """
    for attempt in range(1, attempts):
        try:
            return await operation()
        except ConflictError as e:
            logger.info(
                "Version conflict, retrying",
                extra={"attempt": attempt, "max_attempts": attempts, "details": e.details}
            )

    # Last attempt: a conflict here propagates
    return await operation()
