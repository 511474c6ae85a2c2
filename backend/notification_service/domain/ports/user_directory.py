"""
User Directory Port - Resolves user ids against the user service.

Implementation: notification_service/infrastructure/directory/http_user_directory.py
Any lookup failure is reported as None ("invalid user"), never raised.
"""

from abc import ABC, abstractmethod
from typing import Optional

from notification_service.domain.entities.user import UserSummary
from notification_service.domain.value_objects.user_id import UserId


class UserDirectory(ABC):
    @abstractmethod
    async def get_user(self, user_id: UserId) -> Optional[UserSummary]: ...

    async def is_active(self, user_id: UserId) -> bool:
        user = await self.get_user(user_id)
        return bool(user and user.is_active)
