"""
DTOs - Data Transfer Objects

DTOs for transferring data between layers:
- chat.py    → ChatMessageDTO, ChatDTO, ChatSummaryDTO
- product.py → ProductCreatedDTO, ProductListItemDTO, ProductDetailDTO
- user.py    → UserSummaryDTO, UserProfileDTO

Note: These are different from domain entities.
DTOs are for API input/output, entities are for business logic.
All of them serialize with camelCase keys.
"""

from marketplace.application.dto.chat import ChatDTO, ChatMessageDTO, ChatSummaryDTO
from marketplace.application.dto.product import (
    ProductCreatedDTO,
    ProductDetailDTO,
    ProductListItemDTO,
)
from marketplace.application.dto.user import UserProfileDTO, UserSummaryDTO

__all__ = [
    "ChatDTO",
    "ChatMessageDTO",
    "ChatSummaryDTO",
    "ProductCreatedDTO",
    "ProductDetailDTO",
    "ProductListItemDTO",
    "UserProfileDTO",
    "UserSummaryDTO",
]
