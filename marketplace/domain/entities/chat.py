"""
Chat Entity - The conversation between one buyer and the seller about one product.

Identity is the (product, buyer, seller) triple; at most one chat exists per
(product, buyer). Messages are append-only, in insertion order.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4
from marketplace.domain.entities.message import ChatMessage
from marketplace.domain.value_objects.chat_id import ChatId
from marketplace.domain.value_objects.product_id import ProductId
from marketplace.domain.value_objects.user_id import UserId


@dataclass
class Chat:
    id: ChatId
    product_id: ProductId
    buyer_id: UserId
    seller_id: UserId
    created_at: datetime
    updated_at: datetime
    messages: list[ChatMessage] = field(default_factory=list)

    @property
    def last_message(self) -> Optional[ChatMessage]:
        return self.messages[-1] if self.messages else None

    def has_participant(self, user_id: UserId) -> bool:
        return user_id.value in (self.buyer_id.value, self.seller_id.value)

    def append(self, sender_id: UserId, content: str) -> ChatMessage:
        message = ChatMessage.create(self.id, sender_id, content)
        self.messages.append(message)
        self.updated_at = message.created_at
        return message

    @classmethod
    def create(
        cls, product_id: ProductId, buyer_id: UserId, seller_id: UserId
    ) -> Chat:
        now = datetime.now(timezone.utc)
        return cls(
            id=ChatId(str(uuid4())),
            product_id=product_id,
            buyer_id=buyer_id,
            seller_id=seller_id,
            created_at=now,
            updated_at=now,
        )
