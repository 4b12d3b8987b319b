import asyncio

import pytest

from marketplace.application.commands.chats import (
    NEW_MESSAGE_EVENT,
    ResolveChatCommand,
    ResolveChatHandler,
    SendChatMessageCommand,
    SendChatMessageHandler,
)
from marketplace.domain.exceptions import DomainValidationError, EntityNotFoundError
from marketplace.domain.services.chat_roles import room_id_for
from marketplace.infrastructure.persistence import (
    InMemoryChatRepository,
    InMemoryProductRepository,
    InMemoryUserRepository,
)
from marketplace.infrastructure.realtime import InMemoryRoomRegistry


@pytest.fixture()
def registry():
    return InMemoryRoomRegistry()


@pytest.fixture()
def send(store, registry):
    handler = SendChatMessageHandler(
        InMemoryChatRepository(store), InMemoryProductRepository(store), registry
    )

    def _send(sender, product_id, content, buyer_id=None):
        return asyncio.run(
            handler.execute(
                SendChatMessageCommand(
                    sender_id=sender.id,
                    product_id=product_id,
                    content=content,
                    buyer_id=buyer_id,
                )
            )
        )

    return _send


@pytest.fixture()
def resolve(store):
    handler = ResolveChatHandler(
        InMemoryChatRepository(store),
        InMemoryProductRepository(store),
        InMemoryUserRepository(store),
    )

    def _resolve(caller, product_id, buyer_id=None):
        return asyncio.run(
            handler.execute(
                ResolveChatCommand(
                    caller_id=caller.id, product_id=product_id, buyer_id=buyer_id
                )
            )
        )

    return _resolve


@pytest.fixture()
def room(product, buyer):
    return room_id_for(product.id, buyer.id)


def test_buyer_message_reaches_seller_in_room(
    send, resolve, registry, fake_channel, product, buyer, seller, room
):
    resolve(buyer, product.id.value)
    seller_channel = fake_channel(seller.id)
    registry.join(seller_channel, room)

    message = send(buyer, product.id.value, " hi ", buyer_id=buyer.id.value)

    assert seller_channel.received == [
        (
            NEW_MESSAGE_EVENT,
            {
                "id": message.id.value,
                "senderId": buyer.id.value,
                "content": "hi",
                "createdAt": seller_channel.received[0][1]["createdAt"],
            },
        )
    ]
    history = resolve(seller, product.id.value, buyer.id.value)
    assert [(m.sender_id, m.content) for m in history.chat.messages] == [(buyer.id, "hi")]


def test_seller_reply_goes_to_buyer_room(
    send, resolve, registry, fake_channel, product, buyer, seller, room
):
    resolve(buyer, product.id.value)
    buyer_channel = fake_channel(buyer.id)
    registry.join(buyer_channel, room)

    send(seller, product.id.value, "still available", buyer_id=buyer.id.value)

    assert [data["content"] for _, data in buyer_channel.received] == ["still available"]


def test_messages_keep_order_between_send_and_fetch(
    send, resolve, registry, fake_channel, product, buyer, seller, room
):
    resolve(buyer, product.id.value)
    listener = fake_channel(seller.id)
    registry.join(listener, room)

    for text in ["one", "two", "three"]:
        send(buyer, product.id.value, text)

    history = resolve(seller, product.id.value, buyer.id.value)
    assert [m.content for m in history.chat.messages] == ["one", "two", "three"]
    assert [data["content"] for _, data in listener.received] == ["one", "two", "three"]


def test_concurrent_sends_broadcast_in_commit_order(
    store, registry, resolve, fake_channel, product, buyer, room
):
    resolve(buyer, product.id.value)
    listener = fake_channel(buyer.id)
    registry.join(listener, room)
    handler = SendChatMessageHandler(
        InMemoryChatRepository(store), InMemoryProductRepository(store), registry
    )

    async def scenario():
        await asyncio.gather(
            *(
                handler.execute(
                    SendChatMessageCommand(
                        sender_id=buyer.id, product_id=product.id.value, content=str(i)
                    )
                )
                for i in range(8)
            )
        )

    asyncio.run(scenario())

    stored = next(iter(store.chats.values())).messages
    assert [data["id"] for _, data in listener.received] == [m.id.value for m in stored]


@pytest.mark.parametrize("content", ["", "   ", None])
def test_blank_content_is_not_persisted(
    send, resolve, registry, fake_channel, store, product, buyer, room, content
):
    resolve(buyer, product.id.value)
    listener = fake_channel(buyer.id)
    registry.join(listener, room)

    with pytest.raises(DomainValidationError):
        send(buyer, product.id.value, content)

    assert next(iter(store.chats.values())).messages == []
    assert listener.received == []


def test_message_never_creates_a_chat(send, registry, fake_channel, store, product, buyer, room):
    listener = fake_channel(buyer.id)
    registry.join(listener, room)

    with pytest.raises(EntityNotFoundError):
        send(buyer, product.id.value, "hello?")

    assert store.chats == {}
    assert listener.received == []


def test_seller_message_without_chat_is_dropped(send, store, product, buyer, seller):
    with pytest.raises(EntityNotFoundError):
        send(seller, product.id.value, "hello", buyer_id=buyer.id.value)

    assert store.chats == {}


def test_seller_must_name_buyer(send, resolve, product, buyer, seller):
    resolve(buyer, product.id.value)

    with pytest.raises(DomainValidationError):
        send(seller, product.id.value, "hello")


@pytest.mark.parametrize("product_id", ["not-a-uuid", "7c9e6679-7425-40de-944b-e07fc1f90ae7", None])
def test_unknown_product_is_rejected(send, buyer, product_id):
    with pytest.raises(EntityNotFoundError):
        send(buyer, product_id, "hello")
