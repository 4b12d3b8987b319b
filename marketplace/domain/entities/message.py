"""
ChatMessage Entity - A single immutable message in a chat.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4
from marketplace.domain.exceptions.validation_error import DomainValidationError
from marketplace.domain.value_objects.chat_id import ChatId
from marketplace.domain.value_objects.message_id import MessageId
from marketplace.domain.value_objects.user_id import UserId


def normalize_content(content: str | None) -> str:
    """Trim message text; empty or whitespace-only text is rejected."""
    if not isinstance(content, str) or not content.strip():
        raise DomainValidationError("Message content cannot be empty")
    return content.strip()


@dataclass(frozen=True)
class ChatMessage:
    id: MessageId
    chat_id: ChatId
    sender_id: UserId
    content: str
    created_at: datetime

    @classmethod
    def create(cls, chat_id: ChatId, sender_id: UserId, content: str) -> ChatMessage:
        """Factory method to create a new message with a generated ID and timestamp."""
        return cls(
            id=MessageId(str(uuid4())),
            chat_id=chat_id,
            sender_id=sender_id,
            content=normalize_content(content),
            created_at=datetime.now(timezone.utc),
        )
