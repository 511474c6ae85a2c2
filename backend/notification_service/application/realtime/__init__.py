"""Realtime hub: group membership, push, and per-connection sessions."""

from notification_service.application.realtime.hub import (
    ClientSocket,
    RealtimeHub,
    invocation_message,
    completion_message,
)
from notification_service.application.realtime.session import (
    ChatHubSession,
    HubMethodError,
    HubSessionState,
)

__all__ = [
    "ClientSocket",
    "RealtimeHub",
    "invocation_message",
    "completion_message",
    "ChatHubSession",
    "HubMethodError",
    "HubSessionState",
]
