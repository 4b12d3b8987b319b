"""
ListProductChats Query - The seller's inbox for one product.

Only the product's owner may list its chats. Chats come back most recently
updated first, each paired with its buyer.
"""

from dataclasses import dataclass

from marketplace.application.common.interfaces import Query, QueryHandler
from marketplace.application.common.lookups import load_product
from marketplace.domain.entities.chat import Chat
from marketplace.domain.entities.user import User
from marketplace.domain.exceptions import AccessDeniedError
from marketplace.domain.ports.repositories import (
    ChatRepository,
    ProductRepository,
    UserRepository,
)
from marketplace.domain.services.chat_roles import ChatRole, classify_role
from marketplace.domain.value_objects.user_id import UserId


@dataclass
class ProductChatEntry:
    chat: Chat
    buyer: User


@dataclass(frozen=True)
class ListProductChatsQuery(Query[list[ProductChatEntry]]):
    caller_id: UserId
    product_id: str


class ListProductChatsHandler(QueryHandler[list[ProductChatEntry]]):
    def __init__(
        self,
        chat_repository: ChatRepository,
        product_repository: ProductRepository,
        user_repository: UserRepository,
    ):
        self._chat_repository = chat_repository
        self._product_repository = product_repository
        self._user_repository = user_repository

    async def execute(self, query: ListProductChatsQuery) -> list[ProductChatEntry]:
        product = await load_product(self._product_repository, query.product_id)
        if classify_role(product, query.caller_id) is not ChatRole.SELLER:
            raise AccessDeniedError()

        chats = await self._chat_repository.list_for_seller(query.caller_id, product.id)
        buyers = await self._user_repository.get_many([c.buyer_id for c in chats])

        # Chats whose buyer account is gone are left out
        return [
            ProductChatEntry(chat=chat, buyer=buyers[chat.buyer_id.value])
            for chat in chats
            if chat.buyer_id.value in buyers
        ]
