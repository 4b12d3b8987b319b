import asyncio

import pytest

from marketplace.application.commands.chats import ResolveChatCommand, ResolveChatHandler
from marketplace.domain.exceptions import DomainValidationError, EntityNotFoundError
from marketplace.domain.value_objects.product_id import ProductId
from marketplace.infrastructure.persistence import (
    InMemoryChatRepository,
    InMemoryProductRepository,
    InMemoryUserRepository,
)


class RacingChatRepository(InMemoryChatRepository):
    """Misses the first lookup, as if another request created the chat meanwhile."""

    def __init__(self, store):
        super().__init__(store)
        self.misses = 1

    async def find(self, product_id, buyer_id, seller_id):
        if self.misses:
            self.misses -= 1
            return None
        return await super().find(product_id, buyer_id, seller_id)


@pytest.fixture()
def handler(store):
    return ResolveChatHandler(
        InMemoryChatRepository(store),
        InMemoryProductRepository(store),
        InMemoryUserRepository(store),
    )


def test_buyer_fetch_creates_chat(handler, store, product, buyer, seller):
    resolved = asyncio.run(
        handler.execute(ResolveChatCommand(caller_id=buyer.id, product_id=product.id.value))
    )

    assert resolved.chat.buyer_id == buyer.id
    assert resolved.chat.seller_id == seller.id
    assert resolved.chat.messages == []
    assert resolved.buyer.name == "Buyer"
    assert resolved.seller.name == "Seller"
    assert len(store.chats) == 1


def test_buyer_fetch_is_stable(handler, product, buyer):
    command = ResolveChatCommand(caller_id=buyer.id, product_id=product.id.value)

    async def scenario():
        return await handler.execute(command), await handler.execute(command)

    first, second = asyncio.run(scenario())

    assert first.chat.id == second.chat.id


def test_buyer_id_param_is_ignored_for_buyers(handler, product, buyer, make_user):
    other = make_user(name="Other", email="other@example.com")

    resolved = asyncio.run(
        handler.execute(
            ResolveChatCommand(
                caller_id=buyer.id, product_id=product.id.value, buyer_id=other.id.value
            )
        )
    )

    assert resolved.chat.buyer_id == buyer.id


def test_concurrent_buyer_fetches_converge(handler, store, product, buyer):
    command = ResolveChatCommand(caller_id=buyer.id, product_id=product.id.value)

    async def scenario():
        return await asyncio.gather(*(handler.execute(command) for _ in range(10)))

    results = asyncio.run(scenario())

    assert len({r.chat.id for r in results}) == 1
    assert len(store.chats) == 1


def test_conflict_on_create_returns_existing_chat(store, product, buyer, seller):
    existing = asyncio.run(
        InMemoryChatRepository(store).create(product.id, buyer.id, seller.id)
    )
    handler = ResolveChatHandler(
        RacingChatRepository(store),
        InMemoryProductRepository(store),
        InMemoryUserRepository(store),
    )

    resolved = asyncio.run(
        handler.execute(ResolveChatCommand(caller_id=buyer.id, product_id=product.id.value))
    )

    assert resolved.chat.id == existing.id
    assert len(store.chats) == 1


def test_seller_gets_null_when_buyer_never_started(handler, store, product, buyer, seller):
    resolved = asyncio.run(
        handler.execute(
            ResolveChatCommand(
                caller_id=seller.id, product_id=product.id.value, buyer_id=buyer.id.value
            )
        )
    )

    assert resolved is None
    assert store.chats == {}


def test_seller_and_buyer_resolve_same_chat(handler, product, buyer, seller):
    async def scenario():
        as_buyer = await handler.execute(
            ResolveChatCommand(caller_id=buyer.id, product_id=product.id.value)
        )
        as_seller = await handler.execute(
            ResolveChatCommand(
                caller_id=seller.id,
                product_id=product.id.value,
                buyer_id=buyer.id.value.upper(),
            )
        )
        return as_buyer, as_seller

    as_buyer, as_seller = asyncio.run(scenario())

    assert as_seller.chat.id == as_buyer.chat.id


@pytest.mark.parametrize("buyer_id", [None, "", "not-a-uuid"])
def test_seller_must_name_a_valid_buyer(handler, product, seller, buyer_id):
    with pytest.raises(DomainValidationError):
        asyncio.run(
            handler.execute(
                ResolveChatCommand(
                    caller_id=seller.id, product_id=product.id.value, buyer_id=buyer_id
                )
            )
        )


@pytest.mark.parametrize(
    "product_id", ["7c9e6679-7425-40de-944b-e07fc1f90ae7", "not-a-uuid", ""]
)
def test_unknown_product(handler, buyer, product_id):
    with pytest.raises(EntityNotFoundError):
        asyncio.run(
            handler.execute(ResolveChatCommand(caller_id=buyer.id, product_id=product_id))
        )


def test_product_lookup_uses_canonical_id(handler, product, buyer):
    upper = product.id.value.upper()

    resolved = asyncio.run(
        handler.execute(ResolveChatCommand(caller_id=buyer.id, product_id=upper))
    )

    assert resolved.chat.product_id == ProductId(upper)
