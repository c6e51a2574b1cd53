"""Prisma TypingIndicator Repository Implementation (table `typing_indicators`)."""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional
from chatcore.domain.entities.typing_indicator import TypingIndicator
from chatcore.domain.ports.repositories import TypingIndicatorRepository
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.user_id import UserId

if TYPE_CHECKING:
    from prisma import Prisma
    from prisma.models import TypingIndicator as PrismaTypingIndicator


class PrismaTypingIndicatorRepository(TypingIndicatorRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaTypingIndicator) -> TypingIndicator:
        return TypingIndicator(
            id=record.id,
            conversation_id=ConversationId(record.conversation_id),
            user_id=UserId(record.user_id),
            expires_at=record.expires_at,
        )

    async def get(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> Optional[TypingIndicator]:
        record = await self._prisma.typingindicator.find_first(
            where={"conversation_id": conversation_id.value, "user_id": user_id.value}
        )
        return self._to_entity(record) if record else None

    async def get_by_conversation(
        self, conversation_id: ConversationId
    ) -> list[TypingIndicator]:
        records = await self._prisma.typingindicator.find_many(
            where={"conversation_id": conversation_id.value}
        )
        return [self._to_entity(record) for record in records]

    async def save(self, indicator: TypingIndicator) -> None:
        await self._prisma.typingindicator.upsert(
            where={"id": indicator.id},
            data={
                "create": {
                    "id": indicator.id,
                    "conversation_id": indicator.conversation_id.value,
                    "user_id": indicator.user_id.value,
                    "expires_at": indicator.expires_at,
                },
                "update": {"expires_at": indicator.expires_at},
            },
        )

    async def delete(self, indicator_id: str) -> bool:
        count = await self._prisma.typingindicator.delete_many(where={"id": indicator_id})
        return count > 0
