"""
CheckRoomAccess Query - May this user listen to a product/buyer room?

Only the two participants of the room's chat may. The chat must already exist,
which it does once the buyer has fetched it.
"""

from dataclasses import dataclass

from marketplace.application.common.interfaces import Query, QueryHandler
from marketplace.application.common.lookups import load_product
from marketplace.domain.exceptions import AccessDeniedError
from marketplace.domain.ports.repositories import ChatRepository, ProductRepository
from marketplace.domain.value_objects.product_id import ProductId
from marketplace.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class CheckRoomAccessQuery(Query[None]):
    caller_id: UserId
    product_id: ProductId
    buyer_id: UserId


class CheckRoomAccessHandler(QueryHandler[None]):
    def __init__(
        self,
        chat_repository: ChatRepository,
        product_repository: ProductRepository,
    ):
        self._chat_repository = chat_repository
        self._product_repository = product_repository

    async def execute(self, query: CheckRoomAccessQuery) -> None:
        """
        Raises:
            EntityNotFoundError: the product does not exist
            AccessDeniedError: no chat, or the caller is not one of its participants
        """
        product = await load_product(self._product_repository, query.product_id.value)
        chat = await self._chat_repository.find(
            product.id, query.buyer_id, product.owner_id
        )
        if chat is None or not chat.has_participant(query.caller_id):
            raise AccessDeniedError("Not a participant of this chat")
