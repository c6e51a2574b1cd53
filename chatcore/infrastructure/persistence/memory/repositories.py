"""
In-memory repository implementations over InMemoryDocumentStore.

Lookups scan the table; the secondary indexes of the Prisma schema
(by user, by conversation, composite uniqueness keys) become filters here.
"""

from typing import Optional

from chatcore.domain.entities.conversation import Conversation
from chatcore.domain.entities.membership import Membership
from chatcore.domain.entities.message import Message
from chatcore.domain.entities.reaction import Reaction
from chatcore.domain.entities.typing_indicator import TypingIndicator
from chatcore.domain.entities.user import User
from chatcore.domain.ports.repositories import (
    ConversationRepository,
    MembershipRepository,
    MessageRepository,
    ReactionRepository,
    TypingIndicatorRepository,
    UserRepository,
)
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.message_id import MessageId
from chatcore.domain.value_objects.token_identifier import TokenIdentifier
from chatcore.domain.value_objects.user_id import UserId
from chatcore.infrastructure.persistence.memory.document_store import InMemoryDocumentStore


class InMemoryUserRepository(UserRepository):
    def __init__(self, store: InMemoryDocumentStore):
        self._table = store.users

    async def get_by_id(self, user_id: UserId) -> Optional[User]:
        return self._table.get(user_id.value)

    async def get_by_token(self, token_identifier: TokenIdentifier) -> Optional[User]:
        return next(
            (u for u in self._table.scan() if u.token_identifier == token_identifier),
            None,
        )

    async def list_all(self) -> list[User]:
        return list(self._table.scan())

    async def save(self, user: User) -> None:
        self._table.put(user.id.value, user)


class InMemoryConversationRepository(ConversationRepository):
    def __init__(self, store: InMemoryDocumentStore):
        self._table = store.conversations

    async def get_by_id(self, conversation_id: ConversationId) -> Optional[Conversation]:
        return self._table.get(conversation_id.value)

    async def get_by_direct_key(self, direct_key: str) -> Optional[Conversation]:
        return next(
            (c for c in self._table.scan() if c.direct_key == direct_key), None
        )

    async def save(self, conversation: Conversation) -> None:
        self._table.put(conversation.id.value, conversation)


class InMemoryMembershipRepository(MembershipRepository):
    def __init__(self, store: InMemoryDocumentStore):
        self._table = store.members

    async def get(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> Optional[Membership]:
        return next(
            (
                m
                for m in self._table.scan()
                if m.conversation_id == conversation_id and m.user_id == user_id
            ),
            None,
        )

    async def list_by_conversation(
        self, conversation_id: ConversationId
    ) -> list[Membership]:
        return [m for m in self._table.scan() if m.conversation_id == conversation_id]

    async def list_by_user(self, user_id: UserId) -> list[Membership]:
        return [m for m in self._table.scan() if m.user_id == user_id]

    async def save(self, membership: Membership) -> None:
        self._table.put(membership.id, membership)

    async def delete(self, membership_id: str) -> bool:
        return self._table.remove(membership_id)


class InMemoryMessageRepository(MessageRepository):
    def __init__(self, store: InMemoryDocumentStore):
        self._table = store.messages

    async def get_by_id(self, message_id: MessageId) -> Optional[Message]:
        return self._table.get(message_id.value)

    async def get_by_conversation(self, conversation_id: ConversationId) -> list[Message]:
        messages = [m for m in self._table.scan() if m.conversation_id == conversation_id]
        # sort is stable: equal timestamps keep insertion order
        messages.sort(key=lambda m: m.created_at)
        return messages

    async def save(self, message: Message) -> None:
        self._table.put(message.id.value, message)


class InMemoryReactionRepository(ReactionRepository):
    def __init__(self, store: InMemoryDocumentStore):
        self._table = store.reactions

    async def find(
        self, message_id: MessageId, user_id: UserId, emoji: str
    ) -> Optional[Reaction]:
        return next(
            (
                r
                for r in self._table.scan()
                if r.message_id == message_id and r.user_id == user_id and r.emoji == emoji
            ),
            None,
        )

    async def get_by_message(self, message_id: MessageId) -> list[Reaction]:
        return [r for r in self._table.scan() if r.message_id == message_id]

    async def save(self, reaction: Reaction) -> None:
        self._table.put(reaction.id, reaction)

    async def delete(self, reaction_id: str) -> bool:
        return self._table.remove(reaction_id)


class InMemoryTypingIndicatorRepository(TypingIndicatorRepository):
    def __init__(self, store: InMemoryDocumentStore):
        self._table = store.typing_indicators

    async def get(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> Optional[TypingIndicator]:
        return next(
            (
                t
                for t in self._table.scan()
                if t.conversation_id == conversation_id and t.user_id == user_id
            ),
            None,
        )

    async def get_by_conversation(
        self, conversation_id: ConversationId
    ) -> list[TypingIndicator]:
        return [t for t in self._table.scan() if t.conversation_id == conversation_id]

    async def save(self, indicator: TypingIndicator) -> None:
        self._table.put(indicator.id, indicator)

    async def delete(self, indicator_id: str) -> bool:
        return self._table.remove(indicator_id)
