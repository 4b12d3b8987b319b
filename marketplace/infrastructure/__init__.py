"""
Infrastructure Layer - Technical implementations of domain ports.

This layer contains:
- persistence/: Database implementations (Prisma and in-memory repositories)
- storage/: File system operations (ImageStorageService)
- realtime/: Room membership and broadcast (InMemoryRoomRegistry)

Prisma repositories are imported from their own modules so that the generated
client is only required when STORAGE_BACKEND=prisma.
"""

from marketplace.infrastructure.realtime import InMemoryRoomRegistry
from marketplace.infrastructure.storage import ImageStorageService

__all__ = [
    "ImageStorageService",
    "InMemoryRoomRegistry",
]
