"""
REPOSITORY PORTS - Data persistence interfaces

Each repository port:
- Is an abstract base class (ABC)
- Defines methods the domain needs
- Does NOT specify implementation (Prisma, in-memory, etc.)

Infrastructure layer provides implementations.
"""

from marketplace.domain.ports.repositories.chat_repository import ChatRepository
from marketplace.domain.ports.repositories.product_repository import ProductRepository
from marketplace.domain.ports.repositories.user_repository import UserRepository

__all__ = [
    "ChatRepository",
    "ProductRepository",
    "UserRepository",
]
