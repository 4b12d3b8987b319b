"""
VALUE OBJECTS - Immutable domain types

Each value object:
- Has no identity (compared by value, not by ID)
- Is immutable (frozen dataclass)
- Validates and canonicalises itself on creation
- Pure Python (no framework dependencies)
"""

from marketplace.domain.value_objects.user_id import UserId
from marketplace.domain.value_objects.user_email import UserEmail
from marketplace.domain.value_objects.product_id import ProductId
from marketplace.domain.value_objects.chat_id import ChatId
from marketplace.domain.value_objects.message_id import MessageId

__all__ = [
    "UserId",
    "UserEmail",
    "ProductId",
    "ChatId",
    "MessageId",
]
