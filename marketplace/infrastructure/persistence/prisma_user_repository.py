"""
Prisma User Repository Implementation.

Mapping:
- Prisma model fields: id, email, name, password_hash, created_at, updated_at
- Domain entity: User with value objects (UserId, UserEmail)
"""

from typing import Optional
from prisma import Prisma
from prisma.errors import UniqueViolationError
from prisma.models import User as PrismaUser
from marketplace.domain.entities.user import User
from marketplace.domain.exceptions import ConflictError
from marketplace.domain.ports.repositories import UserRepository
from marketplace.domain.value_objects.user_email import UserEmail
from marketplace.domain.value_objects.user_id import UserId


class PrismaUserRepository(UserRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaUser) -> User:
        """Map Prisma record to domain entity."""
        return User(
            id=UserId(record.id),
            email=UserEmail(record.email),
            name=record.name,
            password_hash=record.password_hash,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    async def get_by_id(self, user_id: UserId) -> Optional[User]:
        record = await self._prisma.user.find_unique(where={"id": user_id.value})
        return self._to_entity(record) if record else None

    async def get_by_email(self, email: UserEmail) -> Optional[User]:
        record = await self._prisma.user.find_unique(where={"email": email.value})
        return self._to_entity(record) if record else None

    async def get_many(self, user_ids: list[UserId]) -> dict[str, User]:
        if not user_ids:
            return {}
        records = await self._prisma.user.find_many(
            where={"id": {"in": list({user_id.value for user_id in user_ids})}}
        )
        users = [self._to_entity(record) for record in records]
        return {user.id.value: user for user in users}

    async def create(self, user: User) -> None:
        try:
            await self._prisma.user.create(
                data={
                    "id": user.id.value,
                    "email": user.email.value,
                    "name": user.name,
                    "password_hash": user.password_hash,
                    "created_at": user.created_at,
                    "updated_at": user.updated_at,
                }
            )
        except UniqueViolationError as e:
            raise ConflictError(
                f"Email {user.email.value} is already registered"
            ) from e
