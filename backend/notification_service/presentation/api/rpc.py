"""
Notification RPC - service-to-service request/response surface.

Each method is a POST to /rpc/NotificationService/<Method> with a JSON request
message and a JSON response message. Timestamps use the protocol
representation {"seconds": int, "nanos": int} (UTC).

Failures never surface as HTTP errors: the response carries success=false and
an error_message, or the method's empty response.
"""

from datetime import datetime, timezone
from logging import getLogger

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter
from pydantic import BaseModel

from notification_service.application.commands.notifications import (
    DeleteNotificationCommand,
    DeleteNotificationHandler,
    MarkNotificationAsReadCommand,
    MarkNotificationAsReadHandler,
    SendRealtimeNotificationCommand,
    SendRealtimeNotificationHandler,
    SendSystemNotificationCommand,
    SendSystemNotificationHandler,
)
from notification_service.application.queries.notifications import (
    GetNotificationHistoryHandler,
    GetNotificationHistoryQuery,
    GetUnreadNotificationCountHandler,
    GetUnreadNotificationCountQuery,
)
from notification_service.config.settings import Config
from notification_service.domain.exceptions import (
    AccessDeniedError,
    DomainValidationError,
    EntityNotFoundError,
)
from notification_service.domain.value_objects.notification_type import (
    NotificationType,
)
from notification_service.domain.value_objects.user_id import UserId

logger = getLogger(__name__)

INTERNAL_ERROR = "Internal server error"


# ==================== MESSAGES ====================


class Timestamp(BaseModel):
    seconds: int = 0
    nanos: int = 0

    @classmethod
    def from_datetime(cls, value: datetime) -> "Timestamp":
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return cls(
            seconds=int(value.replace(microsecond=0).timestamp()),
            nanos=value.microsecond * 1000,
        )


class NotificationResponse(BaseModel):
    success: bool = False
    error_message: str = ""


class SendNotificationRequest(BaseModel):
    user_id: int
    title: str
    content: str
    notification_type: str


class GetNotificationsRequest(BaseModel):
    user_id: int
    page: int = 1
    page_size: int = Config.NOTIFICATION_PAGE_SIZE_DEFAULT


class NotificationInfo(BaseModel):
    id: int
    user_id: int
    title: str
    content: str
    notification_type: str
    is_read: bool
    created_at: Timestamp


class GetNotificationsResponse(BaseModel):
    notifications: list[NotificationInfo] = []
    total_count: int = 0


class MarkAsReadRequest(BaseModel):
    notification_id: int
    user_id: int


class GetUnreadCountRequest(BaseModel):
    user_id: int


class UnreadCountResponse(BaseModel):
    count: int = 0


class DeleteNotificationRequest(BaseModel):
    notification_id: int
    user_id: int


class BroadcastMessageRequest(BaseModel):
    target_user_ids: list[int]
    title: str
    content: str


class BroadcastResponse(BaseModel):
    success: bool = False
    sent_count: int = 0
    error_message: str = ""


# ==================== ROUTER ====================

router = APIRouter(prefix="/rpc/NotificationService", tags=["rpc"])


@router.post("/SendNotification", response_model=NotificationResponse)
@inject
async def send_notification(
    request: SendNotificationRequest,
    handler: FromDishka[SendRealtimeNotificationHandler],
):
    try:
        command = SendRealtimeNotificationCommand(
            user_id=UserId(request.user_id),
            type=NotificationType.parse(request.notification_type),
            title=request.title,
            content=request.content,
        )
        result = await handler.execute(command)
    except DomainValidationError as e:
        return NotificationResponse(success=False, error_message=e.message)
    except Exception as e:
        logger.error(f"Error in SendNotification call: {e}")
        return NotificationResponse(success=False, error_message=INTERNAL_ERROR)

    return NotificationResponse(
        success=result,
        error_message="" if result else "Failed to send notification",
    )


@router.post("/GetNotifications", response_model=GetNotificationsResponse)
@inject
async def get_notifications(
    request: GetNotificationsRequest,
    handler: FromDishka[GetNotificationHistoryHandler],
):
    try:
        query = GetNotificationHistoryQuery(
            user_id=UserId(request.user_id),
            page=request.page,
            size=request.page_size,
        )
        result = await handler.execute(query)
    except Exception as e:
        logger.error(f"Error in GetNotifications call: {e}")
        return GetNotificationsResponse()

    return GetNotificationsResponse(
        notifications=[
            NotificationInfo(
                id=record.id,
                user_id=record.user_id.value,
                title=record.title,
                content=record.content,
                notification_type=record.type.value,
                is_read=record.is_read,
                created_at=Timestamp.from_datetime(record.created_at),
            )
            for record in result.items
        ],
        total_count=result.total_count,
    )


@router.post("/MarkAsRead", response_model=NotificationResponse)
@inject
async def mark_as_read(
    request: MarkAsReadRequest,
    handler: FromDishka[MarkNotificationAsReadHandler],
):
    try:
        command = MarkNotificationAsReadCommand(
            notification_id=request.notification_id,
            user_id=UserId(request.user_id),
        )
        result = await handler.execute(command)
    except DomainValidationError as e:
        return NotificationResponse(success=False, error_message=e.message)
    except Exception as e:
        logger.error(f"Error in MarkAsRead call: {e}")
        return NotificationResponse(success=False, error_message=INTERNAL_ERROR)

    return NotificationResponse(
        success=result,
        error_message="" if result else "Failed to mark notification as read",
    )


@router.post("/GetUnreadCount", response_model=UnreadCountResponse)
@inject
async def get_unread_count(
    request: GetUnreadCountRequest,
    handler: FromDishka[GetUnreadNotificationCountHandler],
):
    try:
        count = await handler.execute(
            GetUnreadNotificationCountQuery(user_id=UserId(request.user_id))
        )
    except Exception as e:
        logger.error(f"Error in GetUnreadCount call: {e}")
        return UnreadCountResponse(count=0)
    return UnreadCountResponse(count=count)


@router.post("/DeleteNotification", response_model=NotificationResponse)
@inject
async def delete_notification(
    request: DeleteNotificationRequest,
    handler: FromDishka[DeleteNotificationHandler],
):
    try:
        command = DeleteNotificationCommand(
            notification_id=request.notification_id,
            user_id=UserId(request.user_id),
        )
        result = await handler.execute(command)
    except (DomainValidationError, EntityNotFoundError, AccessDeniedError) as e:
        return NotificationResponse(success=False, error_message=str(e))
    except Exception as e:
        logger.error(f"Error in DeleteNotification call: {e}")
        return NotificationResponse(success=False, error_message=INTERNAL_ERROR)

    return NotificationResponse(
        success=result,
        error_message="" if result else "Failed to delete notification",
    )


@router.post("/BroadcastMessage", response_model=BroadcastResponse)
@inject
async def broadcast_message(
    request: BroadcastMessageRequest,
    handler: FromDishka[SendSystemNotificationHandler],
):
    try:
        command = SendSystemNotificationCommand(
            user_ids=tuple(UserId(user_id) for user_id in request.target_user_ids),
            title=request.title,
            content=request.content,
        )
        result = await handler.execute(command)
    except DomainValidationError as e:
        return BroadcastResponse(success=False, sent_count=0, error_message=e.message)
    except Exception as e:
        logger.error(f"Error in BroadcastMessage call: {e}")
        return BroadcastResponse(success=False, sent_count=0, error_message=INTERNAL_ERROR)

    return BroadcastResponse(
        success=result,
        sent_count=len(request.target_user_ids) if result else 0,
        error_message="" if result else "Failed to send broadcast",
    )
