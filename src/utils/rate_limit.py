"""Rate limiting berbasis Redis (sliding window) untuk percobaan login."""

import json
import logging
import math
import time
from typing import NamedTuple, Optional

from redis.exceptions import RedisError

from src.core.config import settings
from src.core.redis import get_redis

logger = logging.getLogger(__name__)


class RateLimitResult(NamedTuple):
    ok: bool
    retry_after: int = 0
    remaining: int = 0


class RedisRateLimiter:
    """Sliding window counter yang disimpan di Redis, dibagi antar instance."""

    def __init__(self, redis, calls: int, period: int, prefix: str = "auth_rate_limit"):
        """
        Args:
            redis: Client ``redis.asyncio.Redis`` (atau objek dengan get/setex)
            calls: Jumlah percobaan yang diizinkan per window
            period: Panjang window dalam detik
            prefix: Prefix key Redis
        """
        self.redis = redis
        self.calls = calls
        self.period = period
        self.prefix = prefix

    async def hit(self, key: str, now: Optional[float] = None) -> RateLimitResult:
        """Catat satu percobaan untuk ``key``; tolak jika window sudah penuh."""
        current_time = now if now is not None else time.time()
        redis_key = f"{self.prefix}:{key}"

        try:
            raw = await self.redis.get(redis_key)
            attempts = json.loads(raw) if raw else []

            # Buang percobaan di luar window
            attempts = [t for t in attempts if current_time - t < self.period]

            if len(attempts) >= self.calls:
                retry_after = math.ceil(self.period - (current_time - attempts[0]))
                logger.warning(f"Rate limit exceeded for {redis_key}, retry after {retry_after}s")
                return RateLimitResult(ok=False, retry_after=max(retry_after, 1), remaining=0)

            attempts.append(current_time)
            await self.redis.setex(redis_key, self.period * 2, json.dumps(attempts))

            return RateLimitResult(ok=True, retry_after=0, remaining=self.calls - len(attempts))

        except RedisError as e:
            # Fail open: rate limit tidak boleh memblokir login saat Redis bermasalah
            logger.error(f"Redis error in rate limiting: {e}")
            return RateLimitResult(ok=True, retry_after=0, remaining=self.calls)


async def rate_limit(
    key: str,
    calls: Optional[int] = None,
    period: Optional[int] = None
) -> RateLimitResult:
    """Cek dan catat percobaan untuk ``key`` menggunakan Redis bersama."""
    calls = calls or settings.AUTH_RATE_LIMIT_CALLS
    period = period or settings.AUTH_RATE_LIMIT_PERIOD

    redis = await get_redis()
    if redis is None:
        logger.warning("Redis not available, skipping rate limiting")
        return RateLimitResult(ok=True, retry_after=0, remaining=calls)

    return await RedisRateLimiter(redis, calls, period).hit(key)
