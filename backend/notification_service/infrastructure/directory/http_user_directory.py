"""
User directory backed by the user service HTTP API.

GET {USER_SERVICE_URL}/api/users/{user_id}
    200 → {"id": 7, "username": "...", "displayName": "...", "isActive": true}
    404 → unknown user

Any transport error, non-2xx status or malformed body resolves to None,
which callers treat as "invalid user".
"""

import logging
from typing import Optional

import httpx

from notification_service.config.settings import Config
from notification_service.domain.entities.user import UserSummary
from notification_service.domain.ports.user_directory import UserDirectory
from notification_service.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


class HttpUserDirectory(UserDirectory):
    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    @classmethod
    def from_config(cls) -> "HttpUserDirectory":
        client = httpx.AsyncClient(
            base_url=Config.USER_SERVICE_URL,
            timeout=Config.USER_SERVICE_TIMEOUT_SECONDS,
        )
        return cls(client)

    async def get_user(self, user_id: UserId) -> Optional[UserSummary]:
        try:
            response = await self._client.get(f"/api/users/{user_id.value}")
            if response.status_code == httpx.codes.NOT_FOUND:
                return None
            response.raise_for_status()
            body = response.json()
            return UserSummary(
                user_id=user_id,
                is_active=bool(body.get("isActive", body.get("is_active", False))),
                display_name=body.get("displayName") or body.get("username"),
            )
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            logger.warning(f"User lookup failed for user {user_id}: {e}")
            return None

    async def aclose(self) -> None:
        await self._client.aclose()


class PassthroughUserDirectory(UserDirectory):
    """Used when no user service is configured: every valid id is active."""

    async def get_user(self, user_id: UserId) -> Optional[UserSummary]:
        return UserSummary(user_id=user_id, is_active=True)
