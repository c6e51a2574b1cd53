"""In-memory document store, selected with STORE_BACKEND=memory."""

from chatcore.infrastructure.persistence.memory.document_store import InMemoryDocumentStore
from chatcore.infrastructure.persistence.memory.repositories import (
    InMemoryConversationRepository,
    InMemoryMembershipRepository,
    InMemoryMessageRepository,
    InMemoryReactionRepository,
    InMemoryTypingIndicatorRepository,
    InMemoryUserRepository,
)

__all__ = [
    "InMemoryDocumentStore",
    "InMemoryUserRepository",
    "InMemoryConversationRepository",
    "InMemoryMembershipRepository",
    "InMemoryMessageRepository",
    "InMemoryReactionRepository",
    "InMemoryTypingIndicatorRepository",
]
