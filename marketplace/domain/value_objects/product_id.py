"""
ProductId Value Object - UUID wrapper for product identity.
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class ProductId:
    value: str  # product_id, canonical UUID string

    def __post_init__(self):
        if not self.value:
            raise ValueError("Product ID cannot be empty")
        object.__setattr__(self, "value", str(UUID(str(self.value))))

    def __str__(self) -> str:
        return self.value
