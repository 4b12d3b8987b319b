"""
ResolveChat Command - Find (and for buyers, lazily create) the chat for a product.

Role is decided by comparing the caller with the product owner:
- Seller: must name the buyer. The chat is looked up only; no chat yet is a
  valid outcome and returns None. Sellers never create chats.
- Buyer: the buyer id is always the caller's own. The chat is found or created.

Find-then-create is racy under concurrent first fetches. The store's
(product, buyer) uniqueness is the arbiter: the loser gets ConflictError and
re-reads the winner's chat instead of failing.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from marketplace.application.common.interfaces import Command, CommandHandler
from marketplace.application.common.lookups import load_product, parse_buyer_id
from marketplace.domain.entities.chat import Chat
from marketplace.domain.entities.product import Product
from marketplace.domain.entities.user import User
from marketplace.domain.exceptions import ConflictError, EntityNotFoundError
from marketplace.domain.ports.repositories import (
    ChatRepository,
    ProductRepository,
    UserRepository,
)
from marketplace.domain.services.chat_roles import ChatRole, classify_role
from marketplace.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass
class ResolvedChat:
    chat: Chat
    buyer: User
    seller: User


@dataclass(frozen=True)
class ResolveChatCommand(Command[Optional[ResolvedChat]]):
    caller_id: UserId
    product_id: str
    buyer_id: Optional[str] = None


class ResolveChatHandler(CommandHandler[Optional[ResolvedChat]]):
    def __init__(
        self,
        chat_repository: ChatRepository,
        product_repository: ProductRepository,
        user_repository: UserRepository,
    ):
        self._chat_repository = chat_repository
        self._product_repository = product_repository
        self._user_repository = user_repository

    async def execute(self, command: ResolveChatCommand) -> Optional[ResolvedChat]:
        product = await load_product(self._product_repository, command.product_id)

        if classify_role(product, command.caller_id) is ChatRole.SELLER:
            buyer_id = parse_buyer_id(command.buyer_id)
            chat = await self._chat_repository.find(
                product.id, buyer_id, command.caller_id
            )
            if chat is None:
                return None
        else:
            chat = await self._find_or_create(product, command.caller_id)

        return await self._with_participants(chat)

    async def _find_or_create(self, product: Product, buyer_id: UserId) -> Chat:
        chat = await self._chat_repository.find(product.id, buyer_id, product.owner_id)
        if chat:
            return chat

        try:
            await self._chat_repository.create(product.id, buyer_id, product.owner_id)
            logger.info(
                f"Created chat for product {product.id.value} and buyer {buyer_id.value}"
            )
        except ConflictError:
            logger.debug(
                f"Concurrent create for product {product.id.value} and buyer "
                f"{buyer_id.value}, reading the existing chat"
            )

        chat = await self._chat_repository.find(product.id, buyer_id, product.owner_id)
        if chat is None:
            # The existing row belongs to a different seller
            raise ConflictError(
                f"Chat for product {product.id.value} and buyer {buyer_id.value} "
                "could not be resolved"
            )
        return chat

    async def _with_participants(self, chat: Chat) -> ResolvedChat:
        users = await self._user_repository.get_many([chat.buyer_id, chat.seller_id])
        buyer = users.get(chat.buyer_id.value)
        seller = users.get(chat.seller_id.value)
        if not buyer or not seller:
            raise EntityNotFoundError("Chat participant not found")
        return ResolvedChat(chat=chat, buyer=buyer, seller=seller)
