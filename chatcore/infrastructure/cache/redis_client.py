"""
Async Redis Client Factory.

Creates the Redis client backing the distributed lock manager
(LOCK_BACKEND=redis). Uses redis.asyncio for pure async operations.
"""

import logging
import redis.asyncio as redis
from redis.asyncio import Redis
from chatcore.config.settings import Config

logger = logging.getLogger(__name__)


async def create_redis_client(url: str | None = None) -> Redis:
    """
    Create async Redis client with connection pool.

    Args:
        url: Override for Config.REDIS_URL

    Returns:
        Redis: Connected async Redis client

    Raises:
        redis.ConnectionError: If Redis is not reachable
    """
    redis_url = url or Config.REDIS_URL
    client = redis.from_url(
        redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_timeout=5.0,
        socket_connect_timeout=5.0,
    )

    # Test connection
    await client.ping()
    logger.info(f"[Redis] Connected to {redis_url}")

    return client


async def close_redis_client(client: Redis) -> None:
    """Close Redis client connection. Called from the container finalizer."""
    if client:
        await client.aclose()
        logger.info("[Redis] Connection closed")
