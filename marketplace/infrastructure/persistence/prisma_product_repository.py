"""
Prisma Product Repository Implementation.

Mapping:
- Prisma model fields: id, owner_id, title, category, location, price,
  description, images, likes, created_at, updated_at
- Domain entity: Product with value objects (ProductId, UserId)
"""

from typing import Optional
from prisma import Prisma
from prisma.models import Product as PrismaProduct
from marketplace.domain.entities.product import Product
from marketplace.domain.ports.repositories import ProductRepository
from marketplace.domain.value_objects.product_id import ProductId
from marketplace.domain.value_objects.user_id import UserId


class PrismaProductRepository(ProductRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaProduct) -> Product:
        """Map Prisma record to domain entity."""
        return Product(
            id=ProductId(record.id),
            owner_id=UserId(record.owner_id),
            title=record.title,
            category=record.category,
            location=record.location,
            price=record.price,
            description=record.description,
            images=list(record.images or []),
            likes=record.likes,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    async def get_by_id(self, product_id: ProductId) -> Optional[Product]:
        record = await self._prisma.product.find_unique(
            where={"id": product_id.value}
        )
        return self._to_entity(record) if record else None

    async def list_recent(self, limit: int) -> list[Product]:
        records = await self._prisma.product.find_many(
            order={"created_at": "desc"},
            take=limit,
        )
        return [self._to_entity(record) for record in records]

    async def save(self, product: Product) -> None:
        """Save (create or update) product."""
        await self._prisma.product.upsert(
            where={"id": product.id.value},
            data={
                "create": {
                    "id": product.id.value,
                    "owner_id": product.owner_id.value,
                    "title": product.title,
                    "category": product.category,
                    "location": product.location,
                    "price": product.price,
                    "description": product.description,
                    "images": product.images,
                    "likes": product.likes,
                    "created_at": product.created_at,
                    "updated_at": product.updated_at,
                },
                "update": {
                    "title": product.title,
                    "category": product.category,
                    "location": product.location,
                    "price": product.price,
                    "description": product.description,
                    "images": {"set": product.images},
                    "likes": product.likes,
                    "updated_at": product.updated_at,
                },
            },
        )
