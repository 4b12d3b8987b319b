"""Product DTOs for API responses."""

from datetime import datetime
from typing import Optional

from marketplace.application.dto.base import CamelModel
from marketplace.application.dto.user import UserSummaryDTO
from marketplace.domain.entities.product import Product
from marketplace.domain.entities.user import User


class ProductCreatedDTO(CamelModel):
    id: str
    title: str
    price: float
    location: str
    category: str

    @classmethod
    def from_entity(cls, product: Product) -> "ProductCreatedDTO":
        return cls(
            id=product.id.value,
            title=product.title,
            price=product.price,
            location=product.location,
            category=product.category,
        )


class ProductListItemDTO(CamelModel):
    """Card in the product feed; `image` is the first image or null."""

    id: str
    title: str
    price: float
    location: str
    category: str
    created_at: datetime
    image: Optional[str] = None
    likes: int = 0

    @classmethod
    def from_entity(cls, product: Product) -> "ProductListItemDTO":
        return cls(
            id=product.id.value,
            title=product.title,
            price=product.price,
            location=product.location,
            category=product.category,
            created_at=product.created_at,
            image=product.images[0] if product.images else None,
            likes=product.likes,
        )


class ProductDetailDTO(CamelModel):
    id: str
    title: str
    price: float
    location: str
    category: str
    description: str
    images: list[str]
    likes: int
    created_at: datetime
    updated_at: datetime
    seller: Optional[UserSummaryDTO] = None

    @classmethod
    def from_entity(
        cls, product: Product, seller: Optional[User]
    ) -> "ProductDetailDTO":
        return cls(
            id=product.id.value,
            title=product.title,
            price=product.price,
            location=product.location,
            category=product.category,
            description=product.description,
            images=list(product.images),
            likes=product.likes,
            created_at=product.created_at,
            updated_at=product.updated_at,
            seller=UserSummaryDTO.from_entity(seller) if seller else None,
        )
