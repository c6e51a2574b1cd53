"""
REPOSITORY PORTS - Document store interfaces

Each repository port:
- Is an abstract base class (ABC)
- Defines methods the domain needs
- Does NOT specify implementation (in-memory, Prisma, etc.)

Infrastructure layer provides implementations.
"""

from chatcore.domain.ports.repositories.user_repository import UserRepository
from chatcore.domain.ports.repositories.conversation_repository import ConversationRepository
from chatcore.domain.ports.repositories.membership_repository import MembershipRepository
from chatcore.domain.ports.repositories.message_repository import MessageRepository
from chatcore.domain.ports.repositories.reaction_repository import ReactionRepository
from chatcore.domain.ports.repositories.typing_indicator_repository import (
    TypingIndicatorRepository,
)

__all__ = [
    "UserRepository",
    "ConversationRepository",
    "MembershipRepository",
    "MessageRepository",
    "ReactionRepository",
    "TypingIndicatorRepository",
]
