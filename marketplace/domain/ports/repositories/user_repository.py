"""
User Repository Port - Interface for user persistence.
Implementation: marketplace/infrastructure/persistence/prisma_user_repository.py
"""

from abc import ABC, abstractmethod
from typing import Optional
from marketplace.domain.entities.user import User
from marketplace.domain.value_objects.user_email import UserEmail
from marketplace.domain.value_objects.user_id import UserId


class UserRepository(ABC):
    @abstractmethod
    async def get_by_id(self, user_id: UserId) -> Optional[User]: ...

    @abstractmethod
    async def get_by_email(self, email: UserEmail) -> Optional[User]: ...

    @abstractmethod
    async def get_many(self, user_ids: list[UserId]) -> dict[str, User]:
        """Users keyed by canonical id; unknown ids are left out."""
        ...

    @abstractmethod
    async def create(self, user: User) -> None:
        """Insert a new user. Raises ConflictError if the email is taken."""
        ...
