"""
Chat Hub WebSocket endpoint - /chatHub?access_token=<jwt>

Browsers cannot set headers on a WebSocket handshake, so the bearer token
travels in the access_token query parameter. A missing or invalid token
closes the handshake with 1008 (policy violation) before anything is
registered.

Client frames are JSON invocations:
    {"type": "invocation", "invocationId": "1", "target": "Ping", "arguments": []}
A completion is sent back only when the client supplied an invocationId.
"""

import json
import uuid
from logging import getLogger
from typing import Any, Optional

import jwt
from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from notification_service.application.realtime import (
    ChatHubSession,
    HubMethodError,
    RealtimeHub,
    completion_message,
)
from notification_service.application.services.dispatcher import NotificationDispatcher
from notification_service.domain.exceptions import DomainValidationError
from notification_service.domain.ports.connection_registry import ConnectionRegistry
from notification_service.domain.ports.user_directory import UserDirectory
from notification_service.domain.value_objects.connection_id import ConnectionId
from notification_service.observability import MetricsErrorType, increment_error
from notification_service.presentation.dependencies.auth import decode_token

logger = getLogger(__name__)

router = APIRouter(tags=["realtime"])


@router.websocket("/chatHub")
async def chat_hub(websocket: WebSocket, access_token: Optional[str] = None):
    if not access_token:
        increment_error(MetricsErrorType.AUTH_FAILED)
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    try:
        auth_user = decode_token(access_token)
    except jwt.InvalidTokenError as e:
        increment_error(MetricsErrorType.AUTH_FAILED)
        logger.warning(f"Rejected realtime connection: {e}")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    # Hub, registry, dispatcher and directory are all app-scoped singletons
    container = websocket.app.state.dishka_container
    hub = await container.get(RealtimeHub)
    session = ChatHubSession(
        connection_id=ConnectionId(uuid.uuid4().hex),
        user_id=auth_user.user_id,
        hub=hub,
        registry=await container.get(ConnectionRegistry),
        dispatcher=await container.get(NotificationDispatcher),
        user_directory=await container.get(UserDirectory),
    )

    await websocket.accept()
    await session.on_connected(websocket)

    error: Optional[Exception] = None
    try:
        while True:
            frame = await websocket.receive_text()
            await _handle_frame(session, hub, frame)
    except WebSocketDisconnect:
        pass
    except Exception as e:
        error = e
        logger.error(f"Realtime connection {session.connection_id} failed: {e}")
    finally:
        await session.on_disconnected(error)


async def _handle_frame(session: ChatHubSession, hub: RealtimeHub, frame: str) -> None:
    try:
        message = json.loads(frame)
    except ValueError:
        logger.warning(f"Ignoring malformed frame on {session.connection_id}")
        return
    if not isinstance(message, dict) or message.get("type") != "invocation":
        return

    invocation_id = message.get("invocationId")
    arguments = message.get("arguments") or []
    result: Any = None
    error: Optional[str] = None
    try:
        if not isinstance(arguments, list):
            raise HubMethodError("Invocation arguments must be a list")
        result = await session.invoke(message.get("target", ""), arguments)
    except (HubMethodError, DomainValidationError) as e:
        error = str(e)
    except Exception as e:
        logger.error(f"Hub method {message.get('target')} failed: {e}")
        error = "An unexpected error occurred invoking the hub method"

    if invocation_id is not None:
        await hub.send_to_connection(
            session.connection_id.value,
            completion_message(str(invocation_id), result=result, error=error),
        )
