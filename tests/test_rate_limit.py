"""Tests for the Redis-backed login rate limiter."""

from unittest.mock import AsyncMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from src.utils.rate_limit import RedisRateLimiter, rate_limit


class FakeRedis:
    """Minimal get/setex store."""

    def __init__(self):
        self.store = {}
        self.ttl = {}

    async def get(self, key):
        return self.store.get(key)

    async def setex(self, key, ttl, value):
        self.store[key] = value
        self.ttl[key] = ttl


@pytest.fixture
def limiter():
    return RedisRateLimiter(FakeRedis(), calls=3, period=60)


class TestRedisRateLimiter:

    @pytest.mark.asyncio
    async def test_allows_calls_within_window(self, limiter):
        results = [await limiter.hit("login:1.2.3.4", now=t) for t in (1000, 1001, 1002)]
        assert all(r.ok for r in results)
        assert [r.remaining for r in results] == [2, 1, 0]

    @pytest.mark.asyncio
    async def test_blocks_when_window_full(self, limiter):
        for t in (1000, 1001, 1002):
            await limiter.hit("login:1.2.3.4", now=t)

        blocked = await limiter.hit("login:1.2.3.4", now=1010)

        assert not blocked.ok
        assert blocked.retry_after == 50

    @pytest.mark.asyncio
    async def test_old_attempts_slide_out(self, limiter):
        for t in (1000, 1001, 1002):
            await limiter.hit("login:1.2.3.4", now=t)

        result = await limiter.hit("login:1.2.3.4", now=1061)

        assert result.ok
        assert result.remaining == 1

    @pytest.mark.asyncio
    async def test_keys_are_independent(self, limiter):
        for t in (1000, 1001, 1002):
            await limiter.hit("login:1.2.3.4", now=t)

        assert (await limiter.hit("login:5.6.7.8", now=1003)).ok

    @pytest.mark.asyncio
    async def test_blocked_attempt_not_recorded(self, limiter):
        for t in (1000, 1001, 1002):
            await limiter.hit("login:1.2.3.4", now=t)
        stored = limiter.redis.store["auth_rate_limit:login:1.2.3.4"]

        await limiter.hit("login:1.2.3.4", now=1010)

        assert limiter.redis.store["auth_rate_limit:login:1.2.3.4"] == stored
        assert limiter.redis.ttl["auth_rate_limit:login:1.2.3.4"] == 120

    @pytest.mark.asyncio
    async def test_redis_error_fails_open(self):
        redis = AsyncMock()
        redis.get.side_effect = RedisConnectionError("down")

        result = await RedisRateLimiter(redis, calls=3, period=60).hit("login:x", now=1000)

        assert result.ok
        assert result.remaining == 3


class TestRateLimitHelper:

    @pytest.mark.asyncio
    async def test_skips_when_redis_unavailable(self):
        with patch("src.utils.rate_limit.get_redis", AsyncMock(return_value=None)):
            result = await rate_limit("login:1.2.3.4", calls=5, period=300)
        assert result.ok
        assert result.remaining == 5

    @pytest.mark.asyncio
    async def test_uses_shared_redis(self):
        fake = FakeRedis()
        with patch("src.utils.rate_limit.get_redis", AsyncMock(return_value=fake)):
            await rate_limit("login:1.2.3.4", calls=5, period=300)
        assert "auth_rate_limit:login:1.2.3.4" in fake.store
