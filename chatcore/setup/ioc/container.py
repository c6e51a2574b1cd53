"""
Dishka DI Container Setup.

- Registers repositories, the lock manager, the identity resolver and every
  command/query handler
- Maps abstract ports to the implementation picked by Config
  (STORE_BACKEND, LOCK_BACKEND)
- Scope.APP = created once per container; Scope.REQUEST = per HTTP request

Flow:
  Container → provides → InMemoryMessageRepository → to → SendMessageHandler
                                    ↓
                            uses MessageRepository interface
"""

import logging
from typing import AsyncIterable, Optional

from dishka import AsyncContainer, Provider, Scope, make_async_container, provide
from redis.asyncio import Redis

from chatcore.application.commands.conversations import GetOrCreateDirectHandler
from chatcore.application.commands.groups import (
    AddMemberHandler,
    ClaimAdminHandler,
    CreateGroupHandler,
    DemoteAdminHandler,
    PromoteAdminHandler,
    RemoveMemberHandler,
    RenameGroupHandler,
)
from chatcore.application.commands.messages import (
    DeleteMessageHandler,
    DeleteMessagesHandler,
    MarkAsReadHandler,
    SendMessageHandler,
    ToggleReactionHandler,
)
from chatcore.application.commands.presence import SetTypingHandler
from chatcore.application.commands.users import SetOnlineStatusHandler, SyncIdentityHandler
from chatcore.application.queries.conversations import ListMyConversationsHandler
from chatcore.application.queries.groups import GetGroupDetailsHandler
from chatcore.application.queries.messages import ListMessagesHandler
from chatcore.application.queries.presence import ListTypingUsersHandler
from chatcore.application.queries.users import SearchUsersHandler
from chatcore.application.services import IdentityResolver
from chatcore.config.settings import Config
from chatcore.domain.ports.lock_manager import LockManager
from chatcore.domain.ports.repositories import (
    ConversationRepository,
    MembershipRepository,
    MessageRepository,
    ReactionRepository,
    TypingIndicatorRepository,
    UserRepository,
)
from chatcore.infrastructure.cache.redis_client import close_redis_client, create_redis_client
from chatcore.infrastructure.locks import InMemoryLockManager, RedisLockManager
from chatcore.infrastructure.persistence.memory import (
    InMemoryConversationRepository,
    InMemoryDocumentStore,
    InMemoryMembershipRepository,
    InMemoryMessageRepository,
    InMemoryReactionRepository,
    InMemoryTypingIndicatorRepository,
    InMemoryUserRepository,
)

logger = logging.getLogger(__name__)


class MemoryStoreProvider(Provider):
    """Repositories over a process-local document store (STORE_BACKEND=memory)."""

    def __init__(self, store: Optional[InMemoryDocumentStore] = None):
        super().__init__()
        self._store = store

    @provide(scope=Scope.APP)
    def get_store(self) -> InMemoryDocumentStore:
        return self._store if self._store is not None else InMemoryDocumentStore()

    # ==================== REPOSITORIES ====================

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, store: InMemoryDocumentStore) -> UserRepository:
        return InMemoryUserRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_conversation_repository(
        self, store: InMemoryDocumentStore
    ) -> ConversationRepository:
        return InMemoryConversationRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_membership_repository(self, store: InMemoryDocumentStore) -> MembershipRepository:
        return InMemoryMembershipRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_message_repository(self, store: InMemoryDocumentStore) -> MessageRepository:
        return InMemoryMessageRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_reaction_repository(self, store: InMemoryDocumentStore) -> ReactionRepository:
        return InMemoryReactionRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_typing_repository(
        self, store: InMemoryDocumentStore
    ) -> TypingIndicatorRepository:
        return InMemoryTypingIndicatorRepository(store)


class InMemoryLockProvider(Provider):
    @provide(scope=Scope.APP)
    def get_lock_manager(self) -> LockManager:
        return InMemoryLockManager()


class RedisLockProvider(Provider):
    """Distributed locks shared across workers (LOCK_BACKEND=redis)."""

    @provide(scope=Scope.APP)
    async def get_redis(self) -> AsyncIterable[Redis]:
        client = await create_redis_client()
        yield client
        await close_redis_client(client)

    @provide(scope=Scope.APP)
    def get_lock_manager(self, client: Redis) -> LockManager:
        return RedisLockManager(
            client,
            timeout=Config.LOCK_TIMEOUT_SECONDS,
            blocking_timeout=Config.LOCK_BLOCKING_TIMEOUT_SECONDS,
        )


class AppProvider(Provider):
    """
    Application dependency provider.

    Registers the identity resolver and all handlers. Repositories and the
    lock manager come from the backend providers.
    """

    # ==================== SERVICES ====================

    @provide(scope=Scope.REQUEST)
    def get_identity_resolver(self, user_repository: UserRepository) -> IdentityResolver:
        return IdentityResolver(user_repository)

    # ==================== USER HANDLERS ====================

    @provide(scope=Scope.REQUEST)
    def get_sync_identity_handler(
        self, user_repository: UserRepository, lock_manager: LockManager
    ) -> SyncIdentityHandler:
        return SyncIdentityHandler(user_repository, lock_manager)

    @provide(scope=Scope.REQUEST)
    def get_set_online_status_handler(
        self, identity: IdentityResolver, user_repository: UserRepository
    ) -> SetOnlineStatusHandler:
        return SetOnlineStatusHandler(identity, user_repository)

    @provide(scope=Scope.REQUEST)
    def get_search_users_handler(self, user_repository: UserRepository) -> SearchUsersHandler:
        return SearchUsersHandler(user_repository)

    # ==================== CONVERSATION HANDLERS ====================

    @provide(scope=Scope.REQUEST)
    def get_or_create_direct_handler(
        self,
        identity: IdentityResolver,
        user_repository: UserRepository,
        conversation_repository: ConversationRepository,
        membership_repository: MembershipRepository,
        lock_manager: LockManager,
    ) -> GetOrCreateDirectHandler:
        return GetOrCreateDirectHandler(
            identity,
            user_repository,
            conversation_repository,
            membership_repository,
            lock_manager,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_my_conversations_handler(
        self,
        identity: IdentityResolver,
        user_repository: UserRepository,
        conversation_repository: ConversationRepository,
        membership_repository: MembershipRepository,
        message_repository: MessageRepository,
    ) -> ListMyConversationsHandler:
        return ListMyConversationsHandler(
            identity,
            user_repository,
            conversation_repository,
            membership_repository,
            message_repository,
        )

    # ==================== GROUP HANDLERS ====================

    @provide(scope=Scope.REQUEST)
    def get_create_group_handler(
        self,
        identity: IdentityResolver,
        user_repository: UserRepository,
        conversation_repository: ConversationRepository,
        membership_repository: MembershipRepository,
    ) -> CreateGroupHandler:
        return CreateGroupHandler(
            identity, user_repository, conversation_repository, membership_repository
        )

    @provide(scope=Scope.REQUEST)
    def get_rename_group_handler(
        self,
        identity: IdentityResolver,
        conversation_repository: ConversationRepository,
        membership_repository: MembershipRepository,
        lock_manager: LockManager,
    ) -> RenameGroupHandler:
        return RenameGroupHandler(
            identity, conversation_repository, membership_repository, lock_manager
        )

    @provide(scope=Scope.REQUEST)
    def get_add_member_handler(
        self,
        identity: IdentityResolver,
        user_repository: UserRepository,
        conversation_repository: ConversationRepository,
        membership_repository: MembershipRepository,
        lock_manager: LockManager,
    ) -> AddMemberHandler:
        return AddMemberHandler(
            identity,
            user_repository,
            conversation_repository,
            membership_repository,
            lock_manager,
        )

    @provide(scope=Scope.REQUEST)
    def get_remove_member_handler(
        self,
        identity: IdentityResolver,
        conversation_repository: ConversationRepository,
        membership_repository: MembershipRepository,
        lock_manager: LockManager,
    ) -> RemoveMemberHandler:
        return RemoveMemberHandler(
            identity, conversation_repository, membership_repository, lock_manager
        )

    @provide(scope=Scope.REQUEST)
    def get_promote_admin_handler(
        self,
        identity: IdentityResolver,
        conversation_repository: ConversationRepository,
        membership_repository: MembershipRepository,
        lock_manager: LockManager,
    ) -> PromoteAdminHandler:
        return PromoteAdminHandler(
            identity, conversation_repository, membership_repository, lock_manager
        )

    @provide(scope=Scope.REQUEST)
    def get_demote_admin_handler(
        self,
        identity: IdentityResolver,
        conversation_repository: ConversationRepository,
        membership_repository: MembershipRepository,
        lock_manager: LockManager,
    ) -> DemoteAdminHandler:
        return DemoteAdminHandler(
            identity, conversation_repository, membership_repository, lock_manager
        )

    @provide(scope=Scope.REQUEST)
    def get_claim_admin_handler(
        self,
        identity: IdentityResolver,
        conversation_repository: ConversationRepository,
        membership_repository: MembershipRepository,
        lock_manager: LockManager,
    ) -> ClaimAdminHandler:
        return ClaimAdminHandler(
            identity, conversation_repository, membership_repository, lock_manager
        )

    @provide(scope=Scope.REQUEST)
    def get_group_details_handler(
        self,
        identity: IdentityResolver,
        user_repository: UserRepository,
        conversation_repository: ConversationRepository,
        membership_repository: MembershipRepository,
    ) -> GetGroupDetailsHandler:
        return GetGroupDetailsHandler(
            identity, user_repository, conversation_repository, membership_repository
        )

    # ==================== MESSAGE HANDLERS ====================

    @provide(scope=Scope.REQUEST)
    def get_send_message_handler(
        self,
        identity: IdentityResolver,
        conversation_repository: ConversationRepository,
        membership_repository: MembershipRepository,
        message_repository: MessageRepository,
        lock_manager: LockManager,
    ) -> SendMessageHandler:
        return SendMessageHandler(
            identity,
            conversation_repository,
            membership_repository,
            message_repository,
            lock_manager,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_message_handler(
        self,
        identity: IdentityResolver,
        message_repository: MessageRepository,
        lock_manager: LockManager,
    ) -> DeleteMessageHandler:
        return DeleteMessageHandler(identity, message_repository, lock_manager)

    @provide(scope=Scope.REQUEST)
    def get_delete_messages_handler(
        self,
        identity: IdentityResolver,
        message_repository: MessageRepository,
        lock_manager: LockManager,
    ) -> DeleteMessagesHandler:
        return DeleteMessagesHandler(identity, message_repository, lock_manager)

    @provide(scope=Scope.REQUEST)
    def get_toggle_reaction_handler(
        self,
        identity: IdentityResolver,
        message_repository: MessageRepository,
        reaction_repository: ReactionRepository,
        lock_manager: LockManager,
    ) -> ToggleReactionHandler:
        return ToggleReactionHandler(
            identity, message_repository, reaction_repository, lock_manager
        )

    @provide(scope=Scope.REQUEST)
    def get_mark_as_read_handler(
        self,
        identity: IdentityResolver,
        message_repository: MessageRepository,
        lock_manager: LockManager,
    ) -> MarkAsReadHandler:
        return MarkAsReadHandler(identity, message_repository, lock_manager)

    @provide(scope=Scope.REQUEST)
    def get_list_messages_handler(
        self,
        identity: IdentityResolver,
        user_repository: UserRepository,
        membership_repository: MembershipRepository,
        message_repository: MessageRepository,
        reaction_repository: ReactionRepository,
    ) -> ListMessagesHandler:
        return ListMessagesHandler(
            identity,
            user_repository,
            membership_repository,
            message_repository,
            reaction_repository,
        )

    # ==================== PRESENCE HANDLERS ====================

    @provide(scope=Scope.REQUEST)
    def get_set_typing_handler(
        self,
        identity: IdentityResolver,
        membership_repository: MembershipRepository,
        typing_repository: TypingIndicatorRepository,
        lock_manager: LockManager,
    ) -> SetTypingHandler:
        return SetTypingHandler(
            identity,
            membership_repository,
            typing_repository,
            lock_manager,
            ttl_seconds=Config.TYPING_TTL_SECONDS,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_typing_users_handler(
        self,
        identity: IdentityResolver,
        user_repository: UserRepository,
        typing_repository: TypingIndicatorRepository,
    ) -> ListTypingUsersHandler:
        return ListTypingUsersHandler(identity, user_repository, typing_repository)


def _store_provider() -> Provider:
    if Config.STORE_BACKEND == "prisma":
        # Needs a generated Prisma client, so only imported when selected
        from chatcore.setup.ioc.prisma_provider import PrismaStoreProvider

        return PrismaStoreProvider()
    if Config.STORE_BACKEND != "memory":
        raise ValueError(f"Unknown STORE_BACKEND: {Config.STORE_BACKEND}")
    return MemoryStoreProvider()


def _lock_provider() -> Provider:
    if Config.LOCK_BACKEND == "redis":
        return RedisLockProvider()
    if Config.LOCK_BACKEND != "memory":
        raise ValueError(f"Unknown LOCK_BACKEND: {Config.LOCK_BACKEND}")
    return InMemoryLockProvider()


def create_container(*providers: Provider) -> AsyncContainer:
    """
    Build the application container.

    Args:
        providers: Backend providers to use instead of the ones selected by
            STORE_BACKEND / LOCK_BACKEND (tests pass MemoryStoreProvider and
            InMemoryLockProvider here)
    """
    if not providers:
        providers = (_store_provider(), _lock_provider())
        logger.info(
            f"Container backends: store={Config.STORE_BACKEND}, lock={Config.LOCK_BACKEND}"
        )
    return make_async_container(AppProvider(), *providers)
