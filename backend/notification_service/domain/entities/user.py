"""
UserSummary - What the notification service needs to know about a user.

Resolved through the user directory; never stored locally.
"""

from dataclasses import dataclass
from typing import Optional

from notification_service.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class UserSummary:
    user_id: UserId
    is_active: bool
    display_name: Optional[str] = None
