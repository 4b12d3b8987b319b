"""
Realtime Ports - Live channels and the room fan-out they join.

Implementation: marketplace/infrastructure/realtime/room_registry.py
"""

from abc import ABC, abstractmethod
from typing import Any, AsyncContextManager

from marketplace.domain.value_objects.user_id import UserId


class Channel(ABC):
    """One client's live bidirectional connection, bound to an authenticated user."""

    user_id: UserId

    @abstractmethod
    async def send(self, event: str, data: dict[str, Any]) -> None: ...


class RoomBroadcaster(ABC):
    @abstractmethod
    async def broadcast(self, room_id: str, event: str, data: dict[str, Any]) -> int:
        """Send to every channel joined to room_id. Returns the number reached."""
        ...

    @abstractmethod
    def publishing(self, room_id: str) -> AsyncContextManager:
        """
        Serialize publishers of one room.

        Holding it across "append to store, then broadcast" makes every member
        observe messages in the order the store committed them.
        """
        ...
