"""Realtime implementations (room membership and broadcast)."""

from marketplace.infrastructure.realtime.room_registry import InMemoryRoomRegistry

__all__ = ["InMemoryRoomRegistry"]
