"""
In-memory repository implementations.

Used with STORAGE_BACKEND=memory (local runs without a database) and by the
test suite. State lives in one InMemoryStore shared by the repositories, so it
is scoped to a single process.

Every method yields to the event loop once before touching state, so concurrent
callers interleave the same way they would against a real database. Each
check-and-write happens with no await in between, which is what makes create()
atomic: the uniqueness check and the insert cannot be split by another task.
"""

import asyncio
import copy
from dataclasses import dataclass, field
from typing import Optional

from marketplace.domain.entities.chat import Chat
from marketplace.domain.entities.message import ChatMessage, normalize_content
from marketplace.domain.entities.product import Product
from marketplace.domain.entities.user import User
from marketplace.domain.exceptions import ConflictError, EntityNotFoundError
from marketplace.domain.ports.repositories import (
    ChatRepository,
    ProductRepository,
    UserRepository,
)
from marketplace.domain.value_objects.chat_id import ChatId
from marketplace.domain.value_objects.product_id import ProductId
from marketplace.domain.value_objects.user_email import UserEmail
from marketplace.domain.value_objects.user_id import UserId


@dataclass
class InMemoryStore:
    users: dict[str, User] = field(default_factory=dict)
    products: dict[str, Product] = field(default_factory=dict)
    chats: dict[str, Chat] = field(default_factory=dict)
    # (product_id, buyer_id) -> chat_id, the uniqueness index
    chat_keys: dict[tuple[str, str], str] = field(default_factory=dict)


async def _yield() -> None:
    await asyncio.sleep(0)


class InMemoryUserRepository(UserRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def get_by_id(self, user_id: UserId) -> Optional[User]:
        await _yield()
        user = self._store.users.get(user_id.value)
        return copy.deepcopy(user) if user else None

    async def get_by_email(self, email: UserEmail) -> Optional[User]:
        await _yield()
        for user in self._store.users.values():
            if user.email.value == email.value:
                return copy.deepcopy(user)
        return None

    async def get_many(self, user_ids: list[UserId]) -> dict[str, User]:
        await _yield()
        return {
            user_id.value: copy.deepcopy(self._store.users[user_id.value])
            for user_id in user_ids
            if user_id.value in self._store.users
        }

    async def create(self, user: User) -> None:
        await _yield()
        if any(u.email.value == user.email.value for u in self._store.users.values()):
            raise ConflictError(f"Email {user.email.value} is already registered")
        self._store.users[user.id.value] = copy.deepcopy(user)


class InMemoryProductRepository(ProductRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def get_by_id(self, product_id: ProductId) -> Optional[Product]:
        await _yield()
        product = self._store.products.get(product_id.value)
        return copy.deepcopy(product) if product else None

    async def list_recent(self, limit: int) -> list[Product]:
        await _yield()
        products = sorted(
            self._store.products.values(), key=lambda p: p.created_at, reverse=True
        )
        return [copy.deepcopy(p) for p in products[:limit]]

    async def save(self, product: Product) -> None:
        await _yield()
        self._store.products[product.id.value] = copy.deepcopy(product)


class InMemoryChatRepository(ChatRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def get_by_id(self, chat_id: ChatId) -> Optional[Chat]:
        await _yield()
        chat = self._store.chats.get(chat_id.value)
        return copy.deepcopy(chat) if chat else None

    async def find(
        self, product_id: ProductId, buyer_id: UserId, seller_id: UserId
    ) -> Optional[Chat]:
        await _yield()
        chat_id = self._store.chat_keys.get((product_id.value, buyer_id.value))
        chat = self._store.chats.get(chat_id) if chat_id else None
        if not chat or chat.seller_id.value != seller_id.value:
            return None
        return copy.deepcopy(chat)

    async def create(
        self, product_id: ProductId, buyer_id: UserId, seller_id: UserId
    ) -> Chat:
        await _yield()
        key = (product_id.value, buyer_id.value)
        if key in self._store.chat_keys:
            raise ConflictError(
                f"Chat for product {product_id.value} and buyer {buyer_id.value} already exists"
            )
        chat = Chat.create(product_id, buyer_id, seller_id)
        self._store.chat_keys[key] = chat.id.value
        self._store.chats[chat.id.value] = chat
        return copy.deepcopy(chat)

    async def append_message(
        self, chat_id: ChatId, sender_id: UserId, content: str
    ) -> ChatMessage:
        normalize_content(content)
        await _yield()
        chat = self._store.chats.get(chat_id.value)
        if not chat:
            raise EntityNotFoundError(f"Chat {chat_id.value} not found")
        return chat.append(sender_id, content)

    async def list_for_seller(
        self, seller_id: UserId, product_id: ProductId
    ) -> list[Chat]:
        await _yield()
        chats = [
            chat
            for chat in self._store.chats.values()
            if chat.seller_id.value == seller_id.value
            and chat.product_id.value == product_id.value
        ]
        chats.sort(key=lambda c: c.updated_at, reverse=True)
        return [copy.deepcopy(c) for c in chats]
