"""
Product Repository Port - Interface for product persistence.
Implementation: marketplace/infrastructure/persistence/prisma_product_repository.py
"""

from abc import ABC, abstractmethod
from typing import Optional
from marketplace.domain.entities.product import Product
from marketplace.domain.value_objects.product_id import ProductId


class ProductRepository(ABC):
    @abstractmethod
    async def get_by_id(self, product_id: ProductId) -> Optional[Product]: ...

    @abstractmethod
    async def list_recent(self, limit: int) -> list[Product]:
        """Newest first."""
        ...

    @abstractmethod
    async def save(self, product: Product) -> None: ...
