"""Realtime WebSocket endpoint."""

from notification_service.presentation.realtime.chat_hub import router as chat_hub_router

__all__ = ["chat_hub_router"]
