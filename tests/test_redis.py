"""Tests for the shared Redis client helper."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from src.core import redis as redis_module


@pytest.fixture(autouse=True)
def reset_client():
    redis_module._redis = None
    yield
    redis_module._redis = None


def fake_client(ping_error=None):
    client = MagicMock()
    client.ping = AsyncMock(side_effect=ping_error)
    client.aclose = AsyncMock()
    return client


class TestGetRedis:

    @pytest.mark.asyncio
    async def test_unconfigured_host_returns_none(self):
        with patch.object(redis_module.settings, "REDIS_HOST", None), \
                patch.object(redis_module, "Redis") as redis_cls:
            assert await redis_module.get_redis() is None

        redis_cls.assert_not_called()

    @pytest.mark.asyncio
    async def test_failed_ping_closes_client(self):
        client = fake_client(RedisConnectionError("connection refused"))

        with patch.object(redis_module.settings, "REDIS_HOST", "redis.local"), \
                patch.object(redis_module, "Redis", return_value=client):
            result = await redis_module.get_redis()

        assert result is None
        client.aclose.assert_awaited_once()
        assert redis_module._redis is None

    @pytest.mark.asyncio
    async def test_healthy_client_is_shared(self):
        client = fake_client()

        with patch.object(redis_module.settings, "REDIS_HOST", "redis.local"), \
                patch.object(redis_module, "Redis", return_value=client) as redis_cls:
            first = await redis_module.get_redis()
            second = await redis_module.get_redis()

        assert first is second is client
        redis_cls.assert_called_once()
        client.aclose.assert_not_awaited()
