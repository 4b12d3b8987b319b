"""Chat DTOs for API responses and realtime events."""

from datetime import datetime
from typing import Optional

from marketplace.application.dto.base import CamelModel
from marketplace.application.dto.user import UserSummaryDTO
from marketplace.domain.entities.chat import Chat
from marketplace.domain.entities.message import ChatMessage
from marketplace.domain.entities.user import User


class ChatMessageDTO(CamelModel):
    """
    One message, as returned in chat history and broadcast as `new-message`.

    Wire format:
    {"id": "uuid", "senderId": "uuid", "content": "hi", "createdAt": "2025-01-27T12:00:00Z"}
    """

    id: str
    sender_id: str
    content: str
    created_at: datetime

    @classmethod
    def from_entity(cls, message: ChatMessage) -> "ChatMessageDTO":
        return cls(
            id=message.id.value,
            sender_id=message.sender_id.value,
            content=message.content,
            created_at=message.created_at,
        )


class ChatDTO(CamelModel):
    id: str
    product_id: str
    buyer: UserSummaryDTO
    seller: UserSummaryDTO
    messages: list[ChatMessageDTO]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, chat: Chat, buyer: User, seller: User) -> "ChatDTO":
        return cls(
            id=chat.id.value,
            product_id=chat.product_id.value,
            buyer=UserSummaryDTO.from_entity(buyer),
            seller=UserSummaryDTO.from_entity(seller),
            messages=[ChatMessageDTO.from_entity(m) for m in chat.messages],
            created_at=chat.created_at,
            updated_at=chat.updated_at,
        )


class ChatSummaryDTO(CamelModel):
    """A row of the seller's chat list for one product."""

    id: str
    buyer: UserSummaryDTO
    last_message: Optional[str] = None
    last_message_at: datetime
    message_count: int
    updated_at: datetime

    @classmethod
    def from_entity(cls, chat: Chat, buyer: User) -> "ChatSummaryDTO":
        last = chat.last_message
        return cls(
            id=chat.id.value,
            buyer=UserSummaryDTO.from_entity(buyer),
            last_message=last.content if last else None,
            last_message_at=last.created_at if last else chat.created_at,
            message_count=len(chat.messages),
            updated_at=chat.updated_at,
        )
