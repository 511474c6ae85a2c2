"""
Connection Entity - One live realtime connection of a user.

A user may hold several connections at once (one per device or tab).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone

from notification_service.domain.value_objects.connection_id import ConnectionId
from notification_service.domain.value_objects.user_id import UserId


@dataclass
class Connection:
    connection_id: ConnectionId
    user_id: UserId
    connected_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
