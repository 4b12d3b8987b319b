"""GetUser Query - Load the account behind a session."""

from dataclasses import dataclass

from marketplace.application.common.interfaces import Query, QueryHandler
from marketplace.domain.entities.user import User
from marketplace.domain.exceptions import EntityNotFoundError
from marketplace.domain.ports.repositories import UserRepository
from marketplace.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class GetUserQuery(Query[User]):
    user_id: UserId


class GetUserHandler(QueryHandler[User]):
    def __init__(self, user_repository: UserRepository):
        self._user_repository = user_repository

    async def execute(self, query: GetUserQuery) -> User:
        user = await self._user_repository.get_by_id(query.user_id)
        if not user:
            raise EntityNotFoundError("User not found")
        return user
