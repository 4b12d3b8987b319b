"""
SendChatMessage Command - Persist a realtime message and fan it out to its room.

Steps:
1. Reject empty or whitespace-only content
2. Resolve the product (unknown or malformed id: not found)
3. Classify the sender as seller or buyer of that product
4. Find the existing chat; a message never creates one
5. Append the message via the store
6. Broadcast `new-message` to room product-<product>-buyer-<buyer>

Steps 5 and 6 run under the room's publish lock, so members see messages in
the order the store committed them.

Every rejection raises; the realtime endpoint decides whether the sender hears
about it.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from marketplace.application.common.interfaces import Command, CommandHandler
from marketplace.application.common.lookups import load_product, parse_buyer_id
from marketplace.application.dto.chat import ChatMessageDTO
from marketplace.domain.entities.message import ChatMessage, normalize_content
from marketplace.domain.exceptions import EntityNotFoundError
from marketplace.domain.ports.realtime import RoomBroadcaster
from marketplace.domain.ports.repositories import ChatRepository, ProductRepository
from marketplace.domain.services.chat_roles import ChatRole, classify_role, room_id_for
from marketplace.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)

NEW_MESSAGE_EVENT = "new-message"


@dataclass(frozen=True)
class SendChatMessageCommand(Command[ChatMessage]):
    sender_id: UserId
    product_id: Optional[str]
    content: Any
    buyer_id: Optional[str] = None


class SendChatMessageHandler(CommandHandler[ChatMessage]):
    def __init__(
        self,
        chat_repository: ChatRepository,
        product_repository: ProductRepository,
        broadcaster: RoomBroadcaster,
    ):
        self._chat_repository = chat_repository
        self._product_repository = product_repository
        self._broadcaster = broadcaster

    async def execute(self, command: SendChatMessageCommand) -> ChatMessage:
        content = normalize_content(command.content)
        product = await load_product(self._product_repository, command.product_id)

        if classify_role(product, command.sender_id) is ChatRole.SELLER:
            buyer_id = parse_buyer_id(command.buyer_id)
            seller_id = command.sender_id
        else:
            buyer_id = command.sender_id
            seller_id = product.owner_id

        chat = await self._chat_repository.find(product.id, buyer_id, seller_id)
        if chat is None:
            raise EntityNotFoundError("Chat not found")

        room_id = room_id_for(product.id, chat.buyer_id)
        async with self._broadcaster.publishing(room_id):
            message = await self._chat_repository.append_message(
                chat.id, command.sender_id, content
            )
            reached = await self._broadcaster.broadcast(
                room_id,
                NEW_MESSAGE_EVENT,
                ChatMessageDTO.from_entity(message).to_wire(),
            )

        logger.info(f"Message {message.id.value} sent in room {room_id} ({reached} listeners)")
        return message
