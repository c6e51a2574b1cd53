"""
Prisma repository implementations (PostgreSQL).

Requires a generated client (`prisma generate` against prisma/schema.prisma);
the container only imports this package when STORE_BACKEND=prisma.
"""

from chatcore.infrastructure.persistence.prisma.prisma_user_repository import (
    PrismaUserRepository,
)
from chatcore.infrastructure.persistence.prisma.prisma_conversation_repository import (
    PrismaConversationRepository,
)
from chatcore.infrastructure.persistence.prisma.prisma_membership_repository import (
    PrismaMembershipRepository,
)
from chatcore.infrastructure.persistence.prisma.prisma_message_repository import (
    PrismaMessageRepository,
)
from chatcore.infrastructure.persistence.prisma.prisma_reaction_repository import (
    PrismaReactionRepository,
)
from chatcore.infrastructure.persistence.prisma.prisma_typing_indicator_repository import (
    PrismaTypingIndicatorRepository,
)

__all__ = [
    "PrismaUserRepository",
    "PrismaConversationRepository",
    "PrismaMembershipRepository",
    "PrismaMessageRepository",
    "PrismaReactionRepository",
    "PrismaTypingIndicatorRepository",
]
