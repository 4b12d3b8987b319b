"""Chat queries."""

from .check_room_access import CheckRoomAccessHandler, CheckRoomAccessQuery
from .list_product_chats import (
    ListProductChatsHandler,
    ListProductChatsQuery,
    ProductChatEntry,
)

__all__ = [
    "CheckRoomAccessHandler",
    "CheckRoomAccessQuery",
    "ListProductChatsHandler",
    "ListProductChatsQuery",
    "ProductChatEntry",
]
