"""
Shared Redis connection.

Only the rate limiter writes here (one counter per client and window).
Tests swap `redis_client` for an in-memory fake, so callers look it up
through this module at call time.
"""

import logging

import redis.asyncio as redis
from waybill.app.core.config import settings

logger = logging.getLogger(__name__)

redis_client = redis.from_url(
    settings.redis_url,
    decode_responses=settings.redis_decode_responses,
)


async def ping_redis() -> bool:
    """True when Redis answers; reported by /health."""
    try:
        return bool(await redis_client.ping())
    except (redis.RedisError, ConnectionError, OSError) as exc:
        logger.warning("Redis ping failed", extra={"error": str(exc)})
        return False


async def close_redis() -> None:
    await redis_client.aclose()
