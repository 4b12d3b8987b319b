"""
In-process room registry for live chat channels.

A room is a named set of channels. Joining is idempotent, a channel may sit in
any number of rooms, and disconnect() removes it from all of them. Membership
is process-local: horizontal scaling would need a shared pub/sub behind the
same RoomBroadcaster port.
"""

import asyncio
import logging
import weakref
from typing import Any

from marketplace.domain.ports.realtime import Channel, RoomBroadcaster

logger = logging.getLogger(__name__)


class InMemoryRoomRegistry(RoomBroadcaster):
    def __init__(self):
        self._rooms: dict[str, set[Channel]] = {}
        self._memberships: dict[Channel, set[str]] = {}
        # Locks live only while some publisher holds a reference
        self._publish_locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

    def join(self, channel: Channel, room_id: str) -> bool:
        """Add channel to room_id. Returns False if it was already a member."""
        members = self._rooms.setdefault(room_id, set())
        if channel in members:
            return False
        members.add(channel)
        self._memberships.setdefault(channel, set()).add(room_id)
        logger.debug(f"User {channel.user_id.value} joined {room_id}")
        return True

    def leave(self, channel: Channel, room_id: str) -> bool:
        members = self._rooms.get(room_id)
        if not members or channel not in members:
            return False
        members.discard(channel)
        if not members:
            del self._rooms[room_id]
        rooms = self._memberships.get(channel)
        if rooms is not None:
            rooms.discard(room_id)
            if not rooms:
                del self._memberships[channel]
        logger.debug(f"User {channel.user_id.value} left {room_id}")
        return True

    def disconnect(self, channel: Channel) -> list[str]:
        """Remove channel from every room it joined. Returns the rooms left."""
        rooms = sorted(self._memberships.get(channel, ()))
        for room_id in rooms:
            self.leave(channel, room_id)
        return rooms

    def members(self, room_id: str) -> set[Channel]:
        return set(self._rooms.get(room_id, ()))

    def rooms_of(self, channel: Channel) -> set[str]:
        return set(self._memberships.get(channel, ()))

    def publishing(self, room_id: str) -> asyncio.Lock:
        lock = self._publish_locks.get(room_id)
        if lock is None:
            lock = asyncio.Lock()
            self._publish_locks[room_id] = lock
        return lock

    async def broadcast(self, room_id: str, event: str, data: dict[str, Any]) -> int:
        members = list(self._rooms.get(room_id, ()))
        if not members:
            return 0

        results = await asyncio.gather(
            *(self._safe_send(channel, event, data) for channel in members)
        )

        reached = 0
        for channel, delivered in zip(members, results):
            if delivered:
                reached += 1
            else:
                self.disconnect(channel)
        return reached

    async def _safe_send(
        self, channel: Channel, event: str, data: dict[str, Any]
    ) -> bool:
        try:
            await channel.send(event, data)
            return True
        except Exception as e:
            logger.warning(
                f"Dropping channel of user {channel.user_id.value} after failed send: {e}"
            )
            return False
