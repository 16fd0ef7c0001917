"""Redis connection helper (optional dependency at runtime)."""

import logging
from typing import Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from src.core.config import settings

logger = logging.getLogger(__name__)

_redis: Optional[Redis] = None


async def get_redis() -> Optional[Redis]:
    """Get shared Redis client, atau None jika Redis tidak dikonfigurasi/tersedia."""
    global _redis
    if not settings.REDIS_HOST:
        return None

    if _redis is None:
        client = Redis(
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT or 6379,
            password=settings.REDIS_PASSWORD,
            db=settings.REDIS_DB,
            decode_responses=True,
        )
        try:
            await client.ping()
        except RedisError as e:
            logger.warning(f"Redis not available: {e}")
            await client.aclose()
            return None
        _redis = client

    return _redis


async def close_redis() -> None:
    """Close shared Redis client."""
    global _redis
    if _redis is not None:
        await _redis.aclose()
        _redis = None
