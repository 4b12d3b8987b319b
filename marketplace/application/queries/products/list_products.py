"""ListProducts Query - The public product feed, newest first."""

from dataclasses import dataclass

from marketplace.application.common.interfaces import Query, QueryHandler
from marketplace.domain.entities.product import Product
from marketplace.domain.ports.repositories import ProductRepository


@dataclass(frozen=True)
class ListProductsQuery(Query[list[Product]]):
    limit: int = 100


class ListProductsHandler(QueryHandler[list[Product]]):
    def __init__(self, product_repository: ProductRepository):
        self._product_repository = product_repository

    async def execute(self, query: ListProductsQuery) -> list[Product]:
        return await self._product_repository.list_recent(query.limit)
