"""
Prisma Chat Repository Implementation.

Prisma models (from prisma/schema.prisma):
    model Chat {
        id         String    @id
        product_id String
        buyer_id   String
        seller_id  String
        created_at DateTime
        updated_at DateTime
        messages   Message[]
        @@unique([product_id, buyer_id])
    }

    model Message {
        id         String   @id
        seq        Int      @default(autoincrement())
        chat_id    String
        sender_id  String
        content    String
        created_at DateTime
    }

Notes:
- The (product_id, buyer_id) unique index is the only guard against duplicate
  chats under concurrent first fetches; UniqueViolationError becomes ConflictError.
- Messages are ordered by seq (insertion order), not by created_at.
- append_message bumps the chat and inserts the message in one transaction.
"""

import logging
from typing import Optional
from prisma import Prisma
from prisma.errors import UniqueViolationError
from prisma.models import Chat as PrismaChat
from prisma.models import Message as PrismaMessage
from marketplace.domain.entities.chat import Chat
from marketplace.domain.entities.message import ChatMessage
from marketplace.domain.exceptions import ConflictError, EntityNotFoundError
from marketplace.domain.ports.repositories import ChatRepository
from marketplace.domain.value_objects.chat_id import ChatId
from marketplace.domain.value_objects.message_id import MessageId
from marketplace.domain.value_objects.product_id import ProductId
from marketplace.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)

_WITH_MESSAGES = {"messages": {"order_by": {"seq": "asc"}}}


class PrismaChatRepository(ChatRepository):
    """
    Prisma implementation of ChatRepository.

    Handles persistence of Chat entities and their messages to PostgreSQL via Prisma.
    """

    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        """
        Initialize repository with Prisma client.

        Args:
            prisma: Connected Prisma client (injected by DI container)
        """
        self._prisma = prisma

    def _message_to_entity(self, record: PrismaMessage) -> ChatMessage:
        return ChatMessage(
            id=MessageId(record.id),
            chat_id=ChatId(record.chat_id),
            sender_id=UserId(record.sender_id),
            content=record.content,
            created_at=record.created_at,
        )

    def _to_entity(self, record: PrismaChat) -> Chat:
        """
        Map Prisma record to domain entity.

        Args:
            record: Prisma Chat model instance, messages included when loaded

        Returns:
            Domain Chat entity with value objects
        """
        return Chat(
            id=ChatId(record.id),
            product_id=ProductId(record.product_id),
            buyer_id=UserId(record.buyer_id),
            seller_id=UserId(record.seller_id),
            created_at=record.created_at,
            updated_at=record.updated_at,
            messages=[self._message_to_entity(m) for m in (record.messages or [])],
        )

    async def get_by_id(self, chat_id: ChatId) -> Optional[Chat]:
        record = await self._prisma.chat.find_unique(
            where={"id": chat_id.value}, include=_WITH_MESSAGES
        )
        return self._to_entity(record) if record else None

    async def find(
        self, product_id: ProductId, buyer_id: UserId, seller_id: UserId
    ) -> Optional[Chat]:
        record = await self._prisma.chat.find_first(
            where={
                "product_id": product_id.value,
                "buyer_id": buyer_id.value,
                "seller_id": seller_id.value,
            },
            include=_WITH_MESSAGES,
        )
        return self._to_entity(record) if record else None

    async def create(
        self, product_id: ProductId, buyer_id: UserId, seller_id: UserId
    ) -> Chat:
        chat = Chat.create(product_id, buyer_id, seller_id)
        try:
            await self._prisma.chat.create(
                data={
                    "id": chat.id.value,
                    "product_id": chat.product_id.value,
                    "buyer_id": chat.buyer_id.value,
                    "seller_id": chat.seller_id.value,
                    "created_at": chat.created_at,
                    "updated_at": chat.updated_at,
                }
            )
        except UniqueViolationError as e:
            raise ConflictError(
                f"Chat for product {product_id.value} and buyer {buyer_id.value} already exists"
            ) from e
        return chat

    async def append_message(
        self, chat_id: ChatId, sender_id: UserId, content: str
    ) -> ChatMessage:
        """
        Append a message to a chat.

        Raises:
            DomainValidationError: content is empty after trimming
            EntityNotFoundError: the chat no longer exists
        """
        message = ChatMessage.create(chat_id, sender_id, content)

        async with self._prisma.tx() as tx:
            chat = await tx.chat.update(
                where={"id": chat_id.value},
                data={"updated_at": message.created_at},
            )
            if chat is None:
                raise EntityNotFoundError(f"Chat {chat_id.value} not found")

            await tx.message.create(
                data={
                    "id": message.id.value,
                    "chat_id": chat_id.value,
                    "sender_id": sender_id.value,
                    "content": message.content,
                    "created_at": message.created_at,
                }
            )

        logger.debug(f"Appended message {message.id.value} to chat {chat_id.value}")
        return message

    async def list_for_seller(
        self, seller_id: UserId, product_id: ProductId
    ) -> list[Chat]:
        records = await self._prisma.chat.find_many(
            where={"seller_id": seller_id.value, "product_id": product_id.value},
            order={"updated_at": "desc"},
            include=_WITH_MESSAGES,
        )
        return [self._to_entity(record) for record in records]
