"""
Async Redis Client Factory.

Creates the Redis client backing the shared presence registry.
Uses redis.asyncio for pure async operations.
"""

import logging
import redis.asyncio as redis
from redis.asyncio import Redis
from notification_service.config.settings import Config

logger = logging.getLogger(__name__)


async def create_redis_client(url: str = Config.REDIS_URL) -> Redis:
    """
    Create async Redis client with connection pool.

    Raises:
        redis.ConnectionError: If Redis is not reachable

    Note:
        - decode_responses=True so members and hash values come back as str
        - Tests connection with ping() before returning
    """
    client = redis.from_url(
        url,
        encoding="utf-8",
        decode_responses=True,
        socket_timeout=5.0,
        socket_connect_timeout=5.0,
    )

    await client.ping()
    logger.info(f"[Redis] Connected to {url}")

    return client


async def close_redis_client(client: Redis) -> None:
    """Close Redis client connection. Called on application shutdown."""
    if client:
        await client.aclose()
        logger.info("[Redis] Connection closed")
