"""
Presence Layer - Connection registry implementations.
"""

from notification_service.infrastructure.presence.in_memory_registry import (
    InMemoryConnectionRegistry,
)
from notification_service.infrastructure.presence.redis_registry import (
    RedisConnectionRegistry,
)

__all__ = [
    "InMemoryConnectionRegistry",
    "RedisConnectionRegistry",
]
