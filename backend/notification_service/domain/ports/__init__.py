"""
PORTS - Interfaces that infrastructure implements

A "port" is an abstract interface that defines WHAT the domain needs,
without specifying HOW it's done.

- repositories/          → notification history persistence
- connection_registry.py → presence tracking (in-memory or Redis)
- realtime_transport.py  → group push over persistent connections
- user_directory.py      → user lookups against the user service
"""

from notification_service.domain.ports.connection_registry import ConnectionRegistry
from notification_service.domain.ports.realtime_transport import RealtimeTransport
from notification_service.domain.ports.user_directory import UserDirectory

__all__ = [
    "ConnectionRegistry",
    "RealtimeTransport",
    "UserDirectory",
]
