"""
Prisma Message Repository Implementation.

Prisma Message Model (from schema.prisma):
    model Message {
        id              String   @id
        conversation_id String
        sender_id       String
        content         String
        is_deleted      Boolean  @default(false)
        read_by         String[]
        reply_to_id     String?
        created_at      DateTime @default(now())
    }

Mapping:
- Prisma: read_by (list of user id strings) ←→ Domain: read_by (ReadReceipts)
- Prisma: reply_to_id (str | None) ←→ Domain: reply_to_id (MessageId | None)
- Other fields map directly

Messages are only ever created or soft-deleted/read-marked, so `update`
touches content, is_deleted and read_by.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional
from chatcore.domain.entities.message import Message
from chatcore.domain.ports.repositories.message_repository import MessageRepository
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.message_id import MessageId
from chatcore.domain.value_objects.read_receipts import ReadReceipts
from chatcore.domain.value_objects.user_id import UserId

if TYPE_CHECKING:
    from prisma import Prisma
    from prisma.models import Message as PrismaMessage


class PrismaMessageRepository(MessageRepository):
    """
    Prisma implementation of MessageRepository.

    Handles persistence of Message entities to PostgreSQL via Prisma.
    """

    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        """
        Initialize repository with Prisma client.

        Args:
            prisma: Connected Prisma client (injected by DI container)
        """
        self._prisma = prisma

    def _to_entity(self, record: PrismaMessage) -> Message:
        """
        Map Prisma record to domain entity.

        Args:
            record: Prisma Message model instance

        Returns:
            Domain Message entity with value objects
        """
        return Message(
            id=MessageId(record.id),
            conversation_id=ConversationId(record.conversation_id),
            sender_id=UserId(record.sender_id),
            content=record.content,
            created_at=record.created_at,
            is_deleted=record.is_deleted,
            read_by=ReadReceipts.of(record.read_by),
            reply_to_id=MessageId(record.reply_to_id) if record.reply_to_id else None,
        )

    async def get_by_id(self, message_id: MessageId) -> Optional[Message]:
        """
        Get message by ID.

        Returns:
            Message entity if found, None otherwise
        """
        record = await self._prisma.message.find_unique(where={"id": message_id.value})
        return self._to_entity(record) if record else None

    async def get_by_conversation(self, conversation_id: ConversationId) -> list[Message]:
        """
        Get the whole timeline of a conversation, oldest first.

        Note:
            No pagination; the UI renders the full conversation.
        """
        records = await self._prisma.message.find_many(
            where={"conversation_id": conversation_id.value},
            order={"created_at": "asc"},
        )
        return [self._to_entity(record) for record in records]

    async def save(self, message: Message) -> None:
        """
        Save (create or update) a message.

        Args:
            message: Message entity to persist
        """
        await self._prisma.message.upsert(
            where={"id": message.id.value},
            data={
                "create": {
                    "id": message.id.value,
                    "conversation_id": message.conversation_id.value,
                    "sender_id": message.sender_id.value,
                    "content": message.content,
                    "is_deleted": message.is_deleted,
                    "read_by": message.read_by.to_list(),
                    "reply_to_id": (
                        message.reply_to_id.value if message.reply_to_id else None
                    ),
                    "created_at": message.created_at,
                },
                "update": {
                    "content": message.content,
                    "is_deleted": message.is_deleted,
                    "read_by": {"set": message.read_by.to_list()},
                },
            },
        )
