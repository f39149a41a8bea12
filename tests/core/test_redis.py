"""
Unit tests for the optional Redis connection.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from app.core import redis as redis_module


@pytest.fixture(autouse=True)
def reset_client():
    redis_module._client = None
    yield
    redis_module._client = None


class TestInitRedis:
    @pytest.mark.asyncio
    async def test_publishes_client_after_ping(self):
        client = MagicMock()
        client.ping = AsyncMock(return_value=True)

        with patch("app.core.redis.from_url", return_value=client):
            await redis_module.init_redis()

        assert redis_module.get_redis() is client

    @pytest.mark.asyncio
    async def test_unreachable_server_leaves_client_unset(self):
        client = MagicMock()
        client.ping = AsyncMock(side_effect=RedisConnectionError("refused"))
        client.aclose = AsyncMock()

        with patch("app.core.redis.from_url", return_value=client):
            with pytest.raises(RedisConnectionError):
                await redis_module.init_redis()

        assert redis_module.get_redis() is None
        client.aclose.assert_awaited_once()


class TestPingRedis:
    @pytest.mark.asyncio
    async def test_disabled_when_not_connected(self):
        assert await redis_module.ping_redis() is None

    @pytest.mark.asyncio
    async def test_reports_failed_ping(self):
        client = MagicMock()
        client.ping = AsyncMock(side_effect=RedisConnectionError("gone"))
        redis_module._client = client

        assert await redis_module.ping_redis() is False
