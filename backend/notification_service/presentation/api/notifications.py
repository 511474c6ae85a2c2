"""
Notifications API Router - history, unread counts, presence, and service-to-service sends.

Flow:
  HTTP Request → Router → Command/Query → Handler → Dispatcher → Store / Registry / Hub
                                                          ↓
  HTTP Response ← Router ← Result ←

/send and /system carry no bearer token: they are called by other services
on the internal network (chat service on new messages, admin tooling).
Every other endpoint acts on behalf of the authenticated caller.
"""

from logging import getLogger
from typing import Any, Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from notification_service.application.commands.notifications import (
    DeleteNotificationCommand,
    DeleteNotificationHandler,
    MarkAllNotificationsAsReadCommand,
    MarkAllNotificationsAsReadHandler,
    MarkNotificationAsReadCommand,
    MarkNotificationAsReadHandler,
    SendRealtimeNotificationCommand,
    SendRealtimeNotificationHandler,
    SendSystemNotificationCommand,
    SendSystemNotificationHandler,
)
from notification_service.application.dto.notification import PagedNotificationsDTO
from notification_service.application.queries.notifications import (
    GetNotificationHistoryHandler,
    GetNotificationHistoryQuery,
    GetUnreadNotificationCountHandler,
    GetUnreadNotificationCountQuery,
    GetUserOnlineStatusHandler,
    GetUserOnlineStatusQuery,
    GetUsersOnlineStatusHandler,
    GetUsersOnlineStatusQuery,
)
from notification_service.config.settings import Config
from notification_service.domain.exceptions import AccessDeniedError, EntityNotFoundError
from notification_service.domain.value_objects.notification_type import (
    NotificationType,
)
from notification_service.domain.value_objects.user_id import UserId
from notification_service.presentation.dependencies.auth import (
    AuthUser,
    get_current_user,
)

logger = getLogger(__name__)


# ==================== REQUEST/RESPONSE MODELS ====================


class UnreadCountResponse(BaseModel):
    count: int


class SuccessResponse(BaseModel):
    success: bool


class MarkAllAsReadResponse(BaseModel):
    success: bool
    updated: int


class OnlineStatusResponse(BaseModel):
    user_id: int
    is_online: bool


class BatchOnlineStatusRequest(BaseModel):
    user_ids: list[int]


class BatchOnlineStatusResponse(BaseModel):
    statuses: dict[int, bool]


class SendNotificationRequest(BaseModel):
    """
    Request body for a single-user notification.

    {
        "user_id": 42,
        "type": "message",
        "title": "New message",
        "content": "hi",
        "data": {"sender_id": 7}
    }
    """

    user_id: int
    type: str
    title: str
    content: str
    data: Optional[Any] = None


class SendSystemNotificationRequest(BaseModel):
    user_ids: list[int]
    title: str
    content: str


# ==================== ROUTER ====================

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


# ==================== ENDPOINTS ====================


@router.get(
    "",
    response_model=PagedNotificationsDTO,
    status_code=status.HTTP_200_OK,
)
@inject
async def get_notifications(
    handler: FromDishka[GetNotificationHistoryHandler],
    current_user: AuthUser = Depends(get_current_user),
    page: int = 1,
    size: int = Config.NOTIFICATION_PAGE_SIZE_DEFAULT,
):
    """Newest-first page of the caller's notification history."""
    query = GetNotificationHistoryQuery(
        user_id=current_user.user_id, page=page, size=size
    )
    result = await handler.execute(query)
    return PagedNotificationsDTO.from_page(result)


@router.get(
    "/unread-count",
    response_model=UnreadCountResponse,
    status_code=status.HTTP_200_OK,
)
@inject
async def get_unread_count(
    handler: FromDishka[GetUnreadNotificationCountHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    count = await handler.execute(
        GetUnreadNotificationCountQuery(user_id=current_user.user_id)
    )
    return UnreadCountResponse(count=count)


@router.post(
    "/read-all",
    response_model=MarkAllAsReadResponse,
    status_code=status.HTTP_200_OK,
)
@inject
async def mark_all_as_read(
    handler: FromDishka[MarkAllNotificationsAsReadHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    updated = await handler.execute(
        MarkAllNotificationsAsReadCommand(user_id=current_user.user_id)
    )
    return MarkAllAsReadResponse(success=True, updated=updated)


@router.post(
    "/{notification_id}/read",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
)
@inject
async def mark_as_read(
    notification_id: int,
    handler: FromDishka[MarkNotificationAsReadHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    """
    Mark one of the caller's notifications read.

    Unknown ids and other users' notifications both answer 400, so the
    endpoint does not reveal which ids exist.
    """
    command = MarkNotificationAsReadCommand(
        notification_id=notification_id, user_id=current_user.user_id
    )
    if not await handler.execute(command):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Failed to mark notification as read",
        )
    return SuccessResponse(success=True)


@router.delete(
    "/{notification_id}",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
)
@inject
async def delete_notification(
    notification_id: int,
    handler: FromDishka[DeleteNotificationHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    try:
        command = DeleteNotificationCommand(
            notification_id=notification_id, user_id=current_user.user_id
        )
        success = await handler.execute(command)
        return SuccessResponse(success=success)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except AccessDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e


@router.get(
    "/online-status/{user_id}",
    response_model=OnlineStatusResponse,
    status_code=status.HTTP_200_OK,
)
@inject
async def get_user_online_status(
    user_id: int,
    handler: FromDishka[GetUserOnlineStatusHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    is_online = await handler.execute(GetUserOnlineStatusQuery(user_id=UserId(user_id)))
    return OnlineStatusResponse(user_id=user_id, is_online=is_online)


@router.post(
    "/online-status",
    response_model=BatchOnlineStatusResponse,
    status_code=status.HTTP_200_OK,
)
@inject
async def get_users_online_status(
    request: BatchOnlineStatusRequest,
    handler: FromDishka[GetUsersOnlineStatusHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    query = GetUsersOnlineStatusQuery(
        user_ids=tuple(UserId(user_id) for user_id in request.user_ids)
    )
    statuses = await handler.execute(query)
    return BatchOnlineStatusResponse(statuses=statuses)


@router.post(
    "/send",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
)
@inject
async def send_notification(
    request: SendNotificationRequest,
    handler: FromDishka[SendRealtimeNotificationHandler],
):
    command = SendRealtimeNotificationCommand(
        user_id=UserId(request.user_id),
        type=NotificationType.parse(request.type),
        title=request.title,
        content=request.content,
        data=request.data,
    )
    if not await handler.execute(command):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Failed to send notification",
        )
    return SuccessResponse(success=True)


@router.post(
    "/system",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
)
@inject
async def send_system_notification(
    request: SendSystemNotificationRequest,
    handler: FromDishka[SendSystemNotificationHandler],
):
    command = SendSystemNotificationCommand(
        user_ids=tuple(UserId(user_id) for user_id in request.user_ids),
        title=request.title,
        content=request.content,
    )
    if not await handler.execute(command):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Failed to send system notification",
        )
    return SuccessResponse(success=True)
