"""
Unit tests for rate limiting.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.core import rate_limit
from app.core.rate_limit import RateLimitExceeded, check_rate_limit, enforce_rate_limit


@pytest.fixture(autouse=True)
def clear_memory_store():
    rate_limit._memory_store.clear()
    yield
    rate_limit._memory_store.clear()


class TestMemoryFallback:
    """Without Redis, limits are counted in process memory."""

    @pytest.mark.asyncio
    async def test_allows_up_to_limit(self):
        with patch("app.core.rate_limit.get_redis", return_value=None):
            results = [await check_rate_limit("test:key", 3, 60) for _ in range(4)]

        assert results == [True, True, True, False]

    @pytest.mark.asyncio
    async def test_keys_are_independent(self):
        with patch("app.core.rate_limit.get_redis", return_value=None):
            assert await check_rate_limit("test:a", 1, 60)
            assert await check_rate_limit("test:b", 1, 60)
            assert not await check_rate_limit("test:a", 1, 60)

    @pytest.mark.asyncio
    async def test_enforce_raises_429(self):
        with patch("app.core.rate_limit.get_redis", return_value=None):
            await enforce_rate_limit("test:enforce", 1, 60)

            with pytest.raises(RateLimitExceeded) as exc_info:
                await enforce_rate_limit("test:enforce", 1, 60)

        assert exc_info.value.status_code == 429
        assert exc_info.value.detail["error"] == "RATE_LIMIT_EXCEEDED"
        assert exc_info.value.headers["Retry-After"] == "60"


class TestRedisBackend:
    @pytest.mark.asyncio
    async def test_uses_redis_count(self):
        pipe = MagicMock()
        pipe.execute = AsyncMock(return_value=[0, 5, 1, True])
        client = MagicMock()
        client.pipeline.return_value = pipe

        with patch("app.core.rate_limit.get_redis", return_value=client):
            assert await check_rate_limit("test:redis", 5, 60) is False
            assert await check_rate_limit("test:redis", 6, 60) is True

    @pytest.mark.asyncio
    async def test_redis_failure_falls_back_to_memory(self):
        pipe = MagicMock()
        pipe.execute = AsyncMock(side_effect=ConnectionError("redis down"))
        client = MagicMock()
        client.pipeline.return_value = pipe

        with patch("app.core.rate_limit.get_redis", return_value=client):
            assert await check_rate_limit("test:fallback", 1, 60) is True

        assert "test:fallback" in rate_limit._memory_store
