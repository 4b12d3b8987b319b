"""Realtime (WebSocket) endpoints."""

from marketplace.presentation.realtime.chat_socket import router as realtime_router

__all__ = ["realtime_router"]
