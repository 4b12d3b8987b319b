"""
GetProduct Query - One listing with its seller's public details.

A malformed id is reported as not found. The seller is None if their account
no longer exists.
"""

from dataclasses import dataclass
from typing import Optional

from marketplace.application.common.interfaces import Query, QueryHandler
from marketplace.application.common.lookups import load_product
from marketplace.domain.entities.product import Product
from marketplace.domain.entities.user import User
from marketplace.domain.ports.repositories import ProductRepository, UserRepository


@dataclass
class ProductDetail:
    product: Product
    seller: Optional[User]


@dataclass(frozen=True)
class GetProductQuery(Query[ProductDetail]):
    product_id: str


class GetProductHandler(QueryHandler[ProductDetail]):
    def __init__(
        self,
        product_repository: ProductRepository,
        user_repository: UserRepository,
    ):
        self._product_repository = product_repository
        self._user_repository = user_repository

    async def execute(self, query: GetProductQuery) -> ProductDetail:
        product = await load_product(self._product_repository, query.product_id)
        seller = await self._user_repository.get_by_id(product.owner_id)
        return ProductDetail(product=product, seller=seller)
