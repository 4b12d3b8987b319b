import asyncio

import pytest

from marketplace.domain.exceptions import (
    ConflictError,
    DomainValidationError,
    EntityNotFoundError,
)
from marketplace.domain.value_objects.chat_id import ChatId
from marketplace.infrastructure.persistence import InMemoryChatRepository

MISSING_CHAT = ChatId("5d1c3e2a-0000-4000-8000-000000000000")


@pytest.fixture()
def chats(store):
    return InMemoryChatRepository(store)


def test_create_then_find(chats, product, buyer, seller):
    async def scenario():
        created = await chats.create(product.id, buyer.id, seller.id)
        found = await chats.find(product.id, buyer.id, seller.id)
        return created, found

    created, found = asyncio.run(scenario())

    assert found.id == created.id
    assert found.messages == []


def test_find_requires_matching_seller(chats, product, buyer, make_user):
    other = make_user(name="Other", email="other@example.com")

    async def scenario():
        await chats.create(product.id, buyer.id, product.owner_id)
        return await chats.find(product.id, buyer.id, other.id)

    assert asyncio.run(scenario()) is None


def test_second_create_for_same_pair_conflicts(chats, product, buyer, seller):
    async def scenario():
        await chats.create(product.id, buyer.id, seller.id)
        await chats.create(product.id, buyer.id, seller.id)

    with pytest.raises(ConflictError):
        asyncio.run(scenario())


def test_concurrent_creates_leave_one_chat(chats, store, product, buyer, seller):
    async def scenario():
        return await asyncio.gather(
            *(chats.create(product.id, buyer.id, seller.id) for _ in range(5)),
            return_exceptions=True,
        )

    results = asyncio.run(scenario())

    assert sum(1 for r in results if isinstance(r, ConflictError)) == 4
    assert len(store.chats) == 1


def test_append_keeps_insertion_order(chats, product, buyer, seller):
    async def scenario():
        chat = await chats.create(product.id, buyer.id, seller.id)
        await chats.append_message(chat.id, buyer.id, "  first ")
        await chats.append_message(chat.id, seller.id, "second")
        await chats.append_message(chat.id, buyer.id, "third")
        return await chats.get_by_id(chat.id)

    chat = asyncio.run(scenario())

    assert [m.content for m in chat.messages] == ["first", "second", "third"]
    assert [m.sender_id for m in chat.messages] == [buyer.id, seller.id, buyer.id]
    assert chat.updated_at == chat.messages[-1].created_at


def test_append_rejects_blank_content(chats, store, product, buyer, seller):
    async def scenario():
        chat = await chats.create(product.id, buyer.id, seller.id)
        with pytest.raises(DomainValidationError):
            await chats.append_message(chat.id, buyer.id, "   ")
        return chat

    chat = asyncio.run(scenario())

    assert store.chats[chat.id.value].messages == []


def test_append_to_missing_chat(chats, buyer):
    with pytest.raises(EntityNotFoundError):
        asyncio.run(chats.append_message(MISSING_CHAT, buyer.id, "hello"))


def test_reads_are_copies(chats, store, product, buyer, seller):
    async def scenario():
        chat = await chats.create(product.id, buyer.id, seller.id)
        chat.messages.append("tampered")
        return await chats.get_by_id(chat.id)

    assert asyncio.run(scenario()).messages == []


def test_list_for_seller_most_recent_first(chats, product, seller, make_user):
    alice = make_user(name="Alice", email="alice@example.com")
    bob = make_user(name="Bob", email="bob@example.com")

    async def scenario():
        first = await chats.create(product.id, alice.id, seller.id)
        await chats.create(product.id, bob.id, seller.id)
        await chats.append_message(first.id, alice.id, "still interested?")
        return await chats.list_for_seller(seller.id, product.id)

    listed = asyncio.run(scenario())

    assert [c.buyer_id for c in listed] == [alice.id, bob.id]
