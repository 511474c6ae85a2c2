"""
Cache Layer - Redis client factory.
"""

from notification_service.infrastructure.cache.redis_client import (
    create_redis_client,
    close_redis_client,
)

__all__ = [
    "create_redis_client",
    "close_redis_client",
]
