"""Shared Redis client for the session store.

Connecting is attempted once per process. When REDIS_URL is missing or the
server does not answer, ``get_redis`` returns None and callers degrade:
reads behave as signed out, new sessions cannot be started.
"""

from redis.asyncio import Redis

from src.teamkick.core.config import get_settings
from src.teamkick.core.logging import get_logger

logger = get_logger(__name__)

_client: Redis | None = None
_tried = False


async def _connect(url: str, max_connections: int) -> Redis | None:
    client = Redis.from_url(url, max_connections=max_connections, decode_responses=True)
    try:
        await client.ping()  # type: ignore[misc]
    except Exception as e:
        logger.warning("Redis unreachable, sessions disabled", error=str(e))
        await client.aclose()
        return None
    logger.info("Redis connected")
    return client


async def get_redis() -> Redis | None:
    global _client, _tried
    if _client is not None or _tried:
        return _client

    _tried = True
    settings = get_settings()
    if not settings.redis_url:
        logger.warning("REDIS_URL not set, sessions disabled")
        return None

    _client = await _connect(settings.redis_url, settings.redis_pool_size)
    return _client


async def close_redis() -> None:
    """Close the client; the next get_redis() connects again."""
    if _client is not None:
        await _client.aclose()
        logger.info("Redis connection closed")
    reset_redis_state()


def reset_redis_state() -> None:
    global _client, _tried
    _client = None
    _tried = False
