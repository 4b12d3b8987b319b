"""Product queries."""

from .get_product import GetProductHandler, GetProductQuery, ProductDetail
from .list_products import ListProductsHandler, ListProductsQuery

__all__ = [
    "GetProductHandler",
    "GetProductQuery",
    "ListProductsHandler",
    "ListProductsQuery",
    "ProductDetail",
]
