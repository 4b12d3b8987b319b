"""
Dishka DI Container Setup.

- AppProvider: handlers, the room registry and image storage. Needs a
  repository provider next to it.
- InMemoryProvider: repositories over one process-wide InMemoryStore
  (STORAGE_BACKEND=memory, tests).
- PrismaProvider (setup/ioc/prisma_provider.py): repositories over PostgreSQL.
  Kept in its own module because importing prisma requires a generated client.

Dishka concepts:
- Provider: Class that defines how to create dependencies
- @provide: Decorator to mark factory methods
- Scope: Lifecycle of dependency (APP = singleton, REQUEST = per-request)
- make_async_container: Creates the container

Flow:
  Container → provides → InMemoryChatRepository → to → ResolveChatHandler
                                    ↓
                            uses ChatRepository interface
"""

from dishka import AsyncContainer, Provider, Scope, make_async_container, provide

from marketplace.application.commands.chats import (
    ResolveChatHandler,
    SendChatMessageHandler,
)
from marketplace.application.commands.products import CreateProductHandler
from marketplace.application.commands.users import LogInHandler, SignUpHandler
from marketplace.application.queries.chats import (
    CheckRoomAccessHandler,
    ListProductChatsHandler,
)
from marketplace.application.queries.products import (
    GetProductHandler,
    ListProductsHandler,
)
from marketplace.application.queries.users import GetUserHandler
from marketplace.domain.ports.realtime import RoomBroadcaster
from marketplace.domain.ports.repositories import (
    ChatRepository,
    ProductRepository,
    UserRepository,
)
from marketplace.infrastructure.persistence import (
    InMemoryChatRepository,
    InMemoryProductRepository,
    InMemoryStore,
    InMemoryUserRepository,
)
from marketplace.infrastructure.realtime import InMemoryRoomRegistry
from marketplace.infrastructure.storage import ImageStorageService


class AppProvider(Provider):
    """
    Application dependency provider.

    Registers services and handlers. Repositories come from a storage provider.
    """

    # ==================== REALTIME ====================

    @provide(scope=Scope.APP)
    def get_room_registry(self) -> InMemoryRoomRegistry:
        """
        Provide the room registry (singleton, app-scoped).

        Room membership lives only as long as the process, so there is exactly
        one registry per container.
        """
        return InMemoryRoomRegistry()

    @provide(scope=Scope.APP)
    def get_room_broadcaster(self, registry: InMemoryRoomRegistry) -> RoomBroadcaster:
        return registry

    # ==================== SERVICES ====================

    @provide(scope=Scope.APP)
    def get_image_storage(self) -> ImageStorageService:
        return ImageStorageService()

    # ==================== CHAT HANDLERS ====================

    @provide(scope=Scope.REQUEST)
    def get_resolve_chat_handler(
        self,
        chat_repository: ChatRepository,
        product_repository: ProductRepository,
        user_repository: UserRepository,
    ) -> ResolveChatHandler:
        """
        Provide ResolveChatHandler.

        - Parameters ask for repository interfaces (abstract)
        - Dishka resolves them with whichever storage provider is installed
        """
        return ResolveChatHandler(chat_repository, product_repository, user_repository)

    @provide(scope=Scope.REQUEST)
    def get_send_chat_message_handler(
        self,
        chat_repository: ChatRepository,
        product_repository: ProductRepository,
        broadcaster: RoomBroadcaster,
    ) -> SendChatMessageHandler:
        return SendChatMessageHandler(chat_repository, product_repository, broadcaster)

    @provide(scope=Scope.REQUEST)
    def get_list_product_chats_handler(
        self,
        chat_repository: ChatRepository,
        product_repository: ProductRepository,
        user_repository: UserRepository,
    ) -> ListProductChatsHandler:
        return ListProductChatsHandler(
            chat_repository, product_repository, user_repository
        )

    @provide(scope=Scope.REQUEST)
    def get_check_room_access_handler(
        self,
        chat_repository: ChatRepository,
        product_repository: ProductRepository,
    ) -> CheckRoomAccessHandler:
        return CheckRoomAccessHandler(chat_repository, product_repository)

    # ==================== ACCOUNT HANDLERS ====================

    @provide(scope=Scope.REQUEST)
    def get_sign_up_handler(self, user_repository: UserRepository) -> SignUpHandler:
        return SignUpHandler(user_repository)

    @provide(scope=Scope.REQUEST)
    def get_log_in_handler(self, user_repository: UserRepository) -> LogInHandler:
        return LogInHandler(user_repository)

    @provide(scope=Scope.REQUEST)
    def get_get_user_handler(self, user_repository: UserRepository) -> GetUserHandler:
        return GetUserHandler(user_repository)

    # ==================== PRODUCT HANDLERS ====================

    @provide(scope=Scope.REQUEST)
    def get_create_product_handler(
        self,
        product_repository: ProductRepository,
        image_storage: ImageStorageService,
    ) -> CreateProductHandler:
        return CreateProductHandler(product_repository, image_storage)

    @provide(scope=Scope.REQUEST)
    def get_list_products_handler(
        self, product_repository: ProductRepository
    ) -> ListProductsHandler:
        return ListProductsHandler(product_repository)

    @provide(scope=Scope.REQUEST)
    def get_get_product_handler(
        self,
        product_repository: ProductRepository,
        user_repository: UserRepository,
    ) -> GetProductHandler:
        return GetProductHandler(product_repository, user_repository)


class InMemoryProvider(Provider):
    """Repositories backed by a single in-process store."""

    def __init__(self, store: InMemoryStore | None = None):
        super().__init__()
        self._store = store or InMemoryStore()

    @provide(scope=Scope.APP)
    def get_store(self) -> InMemoryStore:
        return self._store

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, store: InMemoryStore) -> UserRepository:
        return InMemoryUserRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_product_repository(self, store: InMemoryStore) -> ProductRepository:
        return InMemoryProductRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_chat_repository(self, store: InMemoryStore) -> ChatRepository:
        return InMemoryChatRepository(store)


def create_container(*storage_providers: Provider) -> AsyncContainer:
    """
    Create and configure the DI container.

    Without a storage provider the in-memory one is used.
    """
    providers = storage_providers or (InMemoryProvider(),)
    return make_async_container(AppProvider(), *providers)
