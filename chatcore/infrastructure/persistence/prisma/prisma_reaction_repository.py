"""Prisma Reaction Repository Implementation. Rows are inserted or deleted, never updated."""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional
from chatcore.domain.entities.reaction import Reaction
from chatcore.domain.ports.repositories import ReactionRepository
from chatcore.domain.value_objects.message_id import MessageId
from chatcore.domain.value_objects.user_id import UserId

if TYPE_CHECKING:
    from prisma import Prisma
    from prisma.models import Reaction as PrismaReaction


class PrismaReactionRepository(ReactionRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaReaction) -> Reaction:
        return Reaction(
            id=record.id,
            message_id=MessageId(record.message_id),
            user_id=UserId(record.user_id),
            emoji=record.emoji,
            created_at=record.created_at,
        )

    async def find(
        self, message_id: MessageId, user_id: UserId, emoji: str
    ) -> Optional[Reaction]:
        record = await self._prisma.reaction.find_first(
            where={
                "message_id": message_id.value,
                "user_id": user_id.value,
                "emoji": emoji,
            }
        )
        return self._to_entity(record) if record else None

    async def get_by_message(self, message_id: MessageId) -> list[Reaction]:
        records = await self._prisma.reaction.find_many(
            where={"message_id": message_id.value},
            order={"created_at": "asc"},
        )
        return [self._to_entity(record) for record in records]

    async def save(self, reaction: Reaction) -> None:
        await self._prisma.reaction.create(
            data={
                "id": reaction.id,
                "message_id": reaction.message_id.value,
                "user_id": reaction.user_id.value,
                "emoji": reaction.emoji,
                "created_at": reaction.created_at,
            }
        )

    async def delete(self, reaction_id: str) -> bool:
        count = await self._prisma.reaction.delete_many(where={"id": reaction_id})
        return count > 0
