"""
Redis Connection

Optional async Redis client. Rate limiting uses it when it is connected and
falls back to process memory when it is not, so the API runs without Redis.
"""

import logging

from redis.asyncio import Redis, from_url
from redis.exceptions import RedisError

from app.core.config import settings

logger = logging.getLogger(__name__)

_client: Redis | None = None


async def init_redis() -> Redis:
    """
    Connect to ``settings.redis_url``. Call on application startup.

    The client is only published once it answers a PING; on failure the
    connection is closed and the error propagates.
    """
    global _client
    client = from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
    )
    try:
        await client.ping()
    except (RedisError, OSError):
        await client.aclose()
        raise
    _client = client
    return _client


def get_redis() -> Redis | None:
    """The connected client, or None when Redis is not in use."""
    return _client


async def ping_redis() -> bool | None:
    """
    Readiness check.

    Returns:
        None if Redis is not in use, otherwise whether it answered
    """
    if _client is None:
        return None
    try:
        return bool(await _client.ping())
    except (RedisError, OSError) as e:
        logger.warning(f"Redis ping failed: {e}")
        return False


async def close_redis() -> None:
    """Close the connection. Call on application shutdown."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
