"""
Chat Repository Port - Interface for chat (conversation) persistence.
Implementation: marketplace/infrastructure/persistence/prisma_chat_repository.py

Contract:
- At most one chat per (product, buyer). create() must enforce this atomically
  in the store itself and raise ConflictError for the loser of a race.
- Messages are append-only and returned in insertion order.
"""

from abc import ABC, abstractmethod
from typing import Optional
from marketplace.domain.entities.chat import Chat
from marketplace.domain.entities.message import ChatMessage
from marketplace.domain.value_objects.chat_id import ChatId
from marketplace.domain.value_objects.product_id import ProductId
from marketplace.domain.value_objects.user_id import UserId


class ChatRepository(ABC):
    @abstractmethod
    async def get_by_id(self, chat_id: ChatId) -> Optional[Chat]: ...

    @abstractmethod
    async def find(
        self, product_id: ProductId, buyer_id: UserId, seller_id: UserId
    ) -> Optional[Chat]: ...

    @abstractmethod
    async def create(
        self, product_id: ProductId, buyer_id: UserId, seller_id: UserId
    ) -> Chat:
        """Raises ConflictError if a chat for (product_id, buyer_id) exists."""
        ...

    @abstractmethod
    async def append_message(
        self, chat_id: ChatId, sender_id: UserId, content: str
    ) -> ChatMessage:
        """
        Append a message and bump the chat's updated_at.

        Raises EntityNotFoundError if the chat is gone and
        DomainValidationError if content is empty after trimming.
        """
        ...

    @abstractmethod
    async def list_for_seller(
        self, seller_id: UserId, product_id: ProductId
    ) -> list[Chat]:
        """Most recently updated first."""
        ...
