"""
Product Entity - A listing owned by exactly one seller.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4
from marketplace.domain.exceptions.validation_error import DomainValidationError
from marketplace.domain.value_objects.product_id import ProductId
from marketplace.domain.value_objects.user_id import UserId

CATEGORIES = (
    "electronics",
    "fashion",
    "furniture",
    "books",
    "sports",
    "beauty",
    "kids",
    "etc",
)
TITLE_MIN_LENGTH = 2
DESCRIPTION_MIN_LENGTH = 10
MAX_IMAGES = 10


@dataclass
class Product:
    id: ProductId
    owner_id: UserId
    title: str
    category: str
    location: str
    price: float
    description: str
    created_at: datetime
    updated_at: datetime
    images: list[str] = field(default_factory=list)
    likes: int = 0

    def is_owned_by(self, user_id: UserId) -> bool:
        return self.owner_id.value == user_id.value

    @classmethod
    def create(
        cls,
        owner_id: UserId,
        title: str,
        category: str,
        location: str,
        price: float,
        description: str,
        images: list[str] | None = None,
    ) -> Product:
        """
        Factory method for a new listing.

        All rule violations are collected and reported together.
        """
        title = (title or "").strip()
        location = (location or "").strip()
        description = (description or "").strip()
        images = list(images or [])

        errors = []
        if len(title) < TITLE_MIN_LENGTH:
            errors.append(f"Title must be at least {TITLE_MIN_LENGTH} characters")
        if category not in CATEGORIES:
            errors.append("Please choose a valid category")
        if not location:
            errors.append("Location is required")
        if price is None or price < 0:
            errors.append("Price must be 0 or more")
        if len(description) < DESCRIPTION_MIN_LENGTH:
            errors.append(
                f"Description must be at least {DESCRIPTION_MIN_LENGTH} characters"
            )
        if len(images) > MAX_IMAGES:
            errors.append(f"At most {MAX_IMAGES} images are allowed")
        if errors:
            raise DomainValidationError(", ".join(errors))

        now = datetime.now(timezone.utc)
        return cls(
            id=ProductId(str(uuid4())),
            owner_id=owner_id,
            title=title,
            category=category,
            location=location,
            price=price,
            description=description,
            images=images,
            created_at=now,
            updated_at=now,
        )
