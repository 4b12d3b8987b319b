"""Storage Layer - File system operations."""

from marketplace.infrastructure.storage.image_storage_service import ImageStorageService

__all__ = ["ImageStorageService"]
