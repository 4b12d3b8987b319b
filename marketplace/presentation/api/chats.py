"""
Chats API Router - Chat lookup for both sides of a product conversation.

Endpoints:
- GET /api/chats/{product_id}[?buyerId=...]
    Buyer: finds or creates their chat with the seller.
    Seller: must pass buyerId; returns the existing chat or null.
- GET /api/products/{product_id}/chats
    Seller only: every chat about the product, most recently updated first.

Live messages do not go through here; see presentation/realtime/chat_socket.py.
"""

from logging import getLogger
from typing import Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel

from marketplace.application.commands.chats import ResolveChatCommand, ResolveChatHandler
from marketplace.application.dto.chat import ChatDTO, ChatSummaryDTO
from marketplace.application.queries.chats import (
    ListProductChatsHandler,
    ListProductChatsQuery,
)
from marketplace.domain.exceptions import (
    AccessDeniedError,
    ConflictError,
    DomainValidationError,
    EntityNotFoundError,
)
from marketplace.presentation.dependencies.auth import AuthUser, get_current_user

logger = getLogger(__name__)


# ==================== RESPONSE MODELS ====================


class GetChatResponse(BaseModel):
    """
    {"success": true, "chat": {id, productId, buyer, seller, messages, createdAt, updatedAt} | null}
    """

    success: bool = True
    chat: Optional[ChatDTO] = None


class ListProductChatsResponse(BaseModel):
    success: bool = True
    chats: list[ChatSummaryDTO]


# ==================== ROUTER ====================

router = APIRouter(prefix="/api", tags=["chats"])


# ==================== ENDPOINTS ====================


@router.get(
    "/chats/{product_id}",
    response_model=GetChatResponse,
    status_code=status.HTTP_200_OK,
)
@inject
async def get_chat(
    product_id: str,
    handler: FromDishka[ResolveChatHandler],
    buyer_id: Optional[str] = Query(default=None, alias="buyerId"),
    current_user: AuthUser = Depends(get_current_user),
):
    """Find the caller's chat for a product (created lazily for buyers)."""
    try:
        command = ResolveChatCommand(
            caller_id=current_user.id,
            product_id=product_id,
            buyer_id=buyer_id,
        )
        resolved = await handler.execute(command)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except DomainValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e

    if resolved is None:
        return GetChatResponse(chat=None)
    return GetChatResponse(
        chat=ChatDTO.from_entity(resolved.chat, resolved.buyer, resolved.seller)
    )


@router.get(
    "/products/{product_id}/chats",
    response_model=ListProductChatsResponse,
    status_code=status.HTTP_200_OK,
)
@inject
async def list_product_chats(
    product_id: str,
    handler: FromDishka[ListProductChatsHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    """Seller inbox for one product."""
    try:
        entries = await handler.execute(
            ListProductChatsQuery(caller_id=current_user.id, product_id=product_id)
        )
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except AccessDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e

    return ListProductChatsResponse(
        chats=[ChatSummaryDTO.from_entity(entry.chat, entry.buyer) for entry in entries]
    )
