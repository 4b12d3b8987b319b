"""
ENTITIES - Business objects with identity

Each entity:
- Has a unique identifier
- Has behavior (methods)
- Can change state over time
- Pure Python dataclasses (no ORM, no Pydantic)
"""

from marketplace.domain.entities.chat import Chat
from marketplace.domain.entities.message import ChatMessage
from marketplace.domain.entities.product import Product
from marketplace.domain.entities.user import User

__all__ = [
    "Chat",
    "ChatMessage",
    "Product",
    "User",
]
