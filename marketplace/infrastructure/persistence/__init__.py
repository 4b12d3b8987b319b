"""
Persistence Layer - Database implementations.

The Prisma repositories live in their own modules and are imported by the Prisma
provider only, since they need a generated Prisma client.
"""

from marketplace.infrastructure.persistence.in_memory_repositories import (
    InMemoryStore,
    InMemoryUserRepository,
    InMemoryProductRepository,
    InMemoryChatRepository,
)

__all__ = [
    "InMemoryStore",
    "InMemoryUserRepository",
    "InMemoryProductRepository",
    "InMemoryChatRepository",
]
