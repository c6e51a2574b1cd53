"""
Prisma-backed repositories (STORE_BACKEND=prisma).

Importing this module requires a generated client: run
`prisma generate --schema prisma/schema.prisma` first.
"""

import logging
from typing import AsyncIterable

from dishka import Provider, Scope, provide
from prisma import Prisma

from chatcore.config.settings import Config
from chatcore.domain.ports.repositories import (
    ConversationRepository,
    MembershipRepository,
    MessageRepository,
    ReactionRepository,
    TypingIndicatorRepository,
    UserRepository,
)
from chatcore.infrastructure.persistence.prisma import (
    PrismaConversationRepository,
    PrismaMembershipRepository,
    PrismaMessageRepository,
    PrismaReactionRepository,
    PrismaTypingIndicatorRepository,
    PrismaUserRepository,
)

logger = logging.getLogger(__name__)


class PrismaStoreProvider(Provider):
    # ==================== DATABASE ====================

    @provide(scope=Scope.APP)
    async def get_prisma(self) -> AsyncIterable[Prisma]:
        """
        Provide Prisma client (singleton, app-scoped).

        - connected once when first requested, disconnected on container close
        """
        if Config.DATABASE_URL:
            prisma = Prisma(datasource={"url": Config.DATABASE_URL})
        else:
            prisma = Prisma()
        await prisma.connect()
        logger.info("[Prisma] Connected")
        yield prisma
        await prisma.disconnect()
        logger.info("[Prisma] Disconnected")

    # ==================== REPOSITORIES ====================

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, prisma: Prisma) -> UserRepository:
        return PrismaUserRepository(prisma)

    @provide(scope=Scope.REQUEST)
    def get_conversation_repository(self, prisma: Prisma) -> ConversationRepository:
        return PrismaConversationRepository(prisma)

    @provide(scope=Scope.REQUEST)
    def get_membership_repository(self, prisma: Prisma) -> MembershipRepository:
        return PrismaMembershipRepository(prisma)

    @provide(scope=Scope.REQUEST)
    def get_message_repository(self, prisma: Prisma) -> MessageRepository:
        return PrismaMessageRepository(prisma)

    @provide(scope=Scope.REQUEST)
    def get_reaction_repository(self, prisma: Prisma) -> ReactionRepository:
        return PrismaReactionRepository(prisma)

    @provide(scope=Scope.REQUEST)
    def get_typing_repository(self, prisma: Prisma) -> TypingIndicatorRepository:
        return PrismaTypingIndicatorRepository(prisma)
