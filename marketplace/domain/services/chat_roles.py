"""
Role classification and room naming for product chats.

The seller of a product is its owner; every other authenticated user is a
prospective buyer. Both sides of a chat meet in the room named after the
(product, buyer) pair, never after the seller.
"""

import re
from enum import Enum
from typing import Optional

from marketplace.domain.entities.product import Product
from marketplace.domain.value_objects.product_id import ProductId
from marketplace.domain.value_objects.user_id import UserId


class ChatRole(str, Enum):
    SELLER = "seller"
    BUYER = "buyer"


def classify_role(product: Product, caller_id: UserId) -> ChatRole:
    # Both sides are canonical UUID strings (see UserId)
    if product.owner_id.value == caller_id.value:
        return ChatRole.SELLER
    return ChatRole.BUYER


def room_id_for(product_id: ProductId, buyer_id: UserId) -> str:
    return f"product-{product_id.value}-buyer-{buyer_id.value}"


_ROOM_PATTERN = re.compile(r"^product-(?P<product>.+)-buyer-(?P<buyer>.+)$")


def parse_room_id(room_id: str) -> Optional[tuple[ProductId, UserId]]:
    """The (product, buyer) pair a room is named after, or None for other names."""
    match = _ROOM_PATTERN.match(room_id.strip())
    if not match:
        return None
    try:
        return ProductId(match["product"]), UserId(match["buyer"])
    except ValueError:
        return None


def canonical_room_id(room_id: str) -> str:
    """
    Canonical form of a client-supplied room id.

    Ids in a well-formed product/buyer room name are canonicalised so that any
    spelling of the same UUIDs lands in the same room. Anything else is
    returned unchanged.
    """
    parsed = parse_room_id(room_id)
    if parsed is None:
        return room_id
    return room_id_for(*parsed)
