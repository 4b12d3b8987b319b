"""
Lookups shared by several handlers.

Ids arriving from clients are raw strings. A product id that is not a valid
UUID can never match a row, so it is reported the same way as a missing
product; a malformed buyer id is the caller's mistake and is a validation error.
"""

from typing import Optional

from marketplace.domain.entities.product import Product
from marketplace.domain.exceptions import DomainValidationError, EntityNotFoundError
from marketplace.domain.ports.repositories import ProductRepository
from marketplace.domain.value_objects.product_id import ProductId
from marketplace.domain.value_objects.user_id import UserId


async def load_product(
    product_repository: ProductRepository, product_id: Optional[str]
) -> Product:
    try:
        pid = ProductId(product_id)
    except ValueError as e:
        raise EntityNotFoundError("Product not found") from e

    product = await product_repository.get_by_id(pid)
    if not product:
        raise EntityNotFoundError("Product not found")
    return product


def parse_buyer_id(buyer_id: Optional[str]) -> UserId:
    if not buyer_id:
        raise DomainValidationError("buyerId is required")
    try:
        return UserId(buyer_id)
    except ValueError as e:
        raise DomainValidationError("buyerId is not a valid id") from e
