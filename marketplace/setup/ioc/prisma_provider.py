"""
Prisma storage provider (STORAGE_BACKEND=prisma).

Requires `prisma generate` to have been run against prisma/schema.prisma.
"""

from typing import AsyncIterable

from dishka import Provider, Scope, provide
from prisma import Prisma

from marketplace.domain.ports.repositories import (
    ChatRepository,
    ProductRepository,
    UserRepository,
)
from marketplace.infrastructure.persistence.prisma_chat_repository import (
    PrismaChatRepository,
)
from marketplace.infrastructure.persistence.prisma_product_repository import (
    PrismaProductRepository,
)
from marketplace.infrastructure.persistence.prisma_user_repository import (
    PrismaUserRepository,
)


class PrismaProvider(Provider):
    # ==================== DATABASE ====================

    @provide(scope=Scope.APP)
    async def get_prisma(self) -> AsyncIterable[Prisma]:
        """
        Provide Prisma client (singleton, app-scoped).

        - Scope.APP = created ONCE when app starts, shared across all requests
        - Disconnected when the container closes
        """
        prisma = Prisma()
        await prisma.connect()
        yield prisma
        await prisma.disconnect()

    # ==================== REPOSITORIES ====================

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, prisma: Prisma) -> UserRepository:
        return PrismaUserRepository(prisma)

    @provide(scope=Scope.REQUEST)
    def get_product_repository(self, prisma: Prisma) -> ProductRepository:
        """
        Provide ProductRepository implementation.

        - Return type is ABSTRACT (ProductRepository)
        - Implementation is CONCRETE (PrismaProductRepository)
        """
        return PrismaProductRepository(prisma)

    @provide(scope=Scope.REQUEST)
    def get_chat_repository(self, prisma: Prisma) -> ChatRepository:
        return PrismaChatRepository(prisma)
