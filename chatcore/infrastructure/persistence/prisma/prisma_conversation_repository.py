"""
Prisma Conversation Repository Implementation.

- Implements ConversationRepository port from domain layer
- Maps between Prisma models and domain entities
- `direct_key` is @unique, so the pair lookup is a single indexed read
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional
from chatcore.domain.entities.conversation import Conversation
from chatcore.domain.ports.repositories import ConversationRepository
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.message_id import MessageId

if TYPE_CHECKING:
    from prisma import Prisma
    from prisma.models import Conversation as PrismaConversation


class PrismaConversationRepository(ConversationRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaConversation) -> Conversation:
        """Map Prisma record to domain entity."""
        return Conversation(
            id=ConversationId(record.id),
            is_group=record.is_group,
            group_name=record.group_name,
            last_message_id=(
                MessageId(record.last_message_id) if record.last_message_id else None
            ),
            direct_key=record.direct_key,
            created_at=record.created_at,
        )

    async def get_by_id(self, conversation_id: ConversationId) -> Optional[Conversation]:
        record = await self._prisma.conversation.find_unique(
            where={"id": conversation_id.value}
        )
        return self._to_entity(record) if record else None

    async def get_by_direct_key(self, direct_key: str) -> Optional[Conversation]:
        record = await self._prisma.conversation.find_unique(
            where={"direct_key": direct_key}
        )
        return self._to_entity(record) if record else None

    async def save(self, conversation: Conversation) -> None:
        """Save (create or update) conversation."""
        last_message_id = (
            conversation.last_message_id.value if conversation.last_message_id else None
        )
        await self._prisma.conversation.upsert(
            where={"id": conversation.id.value},
            data={
                "create": {
                    "id": conversation.id.value,
                    "is_group": conversation.is_group,
                    "group_name": conversation.group_name,
                    "last_message_id": last_message_id,
                    "direct_key": conversation.direct_key,
                    "created_at": conversation.created_at,
                },
                "update": {
                    "group_name": conversation.group_name,
                    "last_message_id": last_message_id,
                },
            },
        )
