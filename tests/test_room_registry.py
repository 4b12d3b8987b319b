import asyncio

import pytest

from marketplace.domain.value_objects.user_id import UserId
from marketplace.infrastructure.realtime import InMemoryRoomRegistry

ALICE = UserId("11111111-1111-4111-8111-111111111111")
BOB = UserId("22222222-2222-4222-8222-222222222222")


@pytest.fixture()
def registry():
    return InMemoryRoomRegistry()


def test_join_is_idempotent(registry, fake_channel):
    channel = fake_channel(ALICE)

    assert registry.join(channel, "room-a") is True
    assert registry.join(channel, "room-a") is False
    assert registry.members("room-a") == {channel}

    delivered = asyncio.run(registry.broadcast("room-a", "new-message", {"n": 1}))

    assert delivered == 1
    assert channel.received == [("new-message", {"n": 1})]


def test_broadcast_reaches_only_room_members(registry, fake_channel):
    alice, bob = fake_channel(ALICE), fake_channel(BOB)
    registry.join(alice, "room-a")
    registry.join(bob, "room-b")

    delivered = asyncio.run(registry.broadcast("room-a", "new-message", {"n": 1}))

    assert delivered == 1
    assert alice.received == [("new-message", {"n": 1})]
    assert bob.received == []


def test_broadcast_to_empty_room(registry):
    assert asyncio.run(registry.broadcast("nobody-here", "new-message", {})) == 0


def test_leave(registry, fake_channel):
    channel = fake_channel(ALICE)
    registry.join(channel, "room-a")

    assert registry.leave(channel, "room-a") is True
    assert registry.leave(channel, "room-a") is False
    assert registry.members("room-a") == set()
    assert registry.rooms_of(channel) == set()


def test_disconnect_leaves_every_room(registry, fake_channel):
    alice, bob = fake_channel(ALICE), fake_channel(BOB)
    registry.join(alice, "room-a")
    registry.join(alice, "room-b")
    registry.join(bob, "room-b")

    left = registry.disconnect(alice)

    assert left == ["room-a", "room-b"]
    assert registry.members("room-a") == set()
    assert registry.members("room-b") == {bob}
    assert registry.disconnect(alice) == []


def test_failed_channel_is_dropped(registry, fake_channel):
    healthy, broken = fake_channel(ALICE), fake_channel(BOB, fail=True)
    registry.join(healthy, "room-a")
    registry.join(broken, "room-a")
    registry.join(broken, "room-b")

    delivered = asyncio.run(registry.broadcast("room-a", "new-message", {"n": 1}))

    assert delivered == 1
    assert registry.members("room-a") == {healthy}
    assert registry.rooms_of(broken) == set()


def test_publishing_lock_is_per_room(registry):
    async def scenario():
        async with registry.publishing("room-a"):
            same = registry.publishing("room-a")
            other = registry.publishing("room-b")
            return same.locked(), other.locked()

    assert asyncio.run(scenario()) == (True, False)
