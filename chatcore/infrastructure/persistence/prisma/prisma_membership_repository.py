"""Prisma Membership Repository Implementation (table `members`)."""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional
from chatcore.domain.entities.membership import Membership
from chatcore.domain.ports.repositories import MembershipRepository
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.user_id import UserId

if TYPE_CHECKING:
    from prisma import Prisma
    from prisma.models import Member as PrismaMember


class PrismaMembershipRepository(MembershipRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaMember) -> Membership:
        return Membership(
            id=record.id,
            user_id=UserId(record.user_id),
            conversation_id=ConversationId(record.conversation_id),
            is_admin=record.is_admin,
            created_at=record.created_at,
        )

    async def get(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> Optional[Membership]:
        record = await self._prisma.member.find_first(
            where={"conversation_id": conversation_id.value, "user_id": user_id.value}
        )
        return self._to_entity(record) if record else None

    async def list_by_conversation(
        self, conversation_id: ConversationId
    ) -> list[Membership]:
        records = await self._prisma.member.find_many(
            where={"conversation_id": conversation_id.value},
            order={"created_at": "asc"},
        )
        return [self._to_entity(record) for record in records]

    async def list_by_user(self, user_id: UserId) -> list[Membership]:
        records = await self._prisma.member.find_many(
            where={"user_id": user_id.value},
            order={"created_at": "asc"},
        )
        return [self._to_entity(record) for record in records]

    async def save(self, membership: Membership) -> None:
        await self._prisma.member.upsert(
            where={"id": membership.id},
            data={
                "create": {
                    "id": membership.id,
                    "user_id": membership.user_id.value,
                    "conversation_id": membership.conversation_id.value,
                    "is_admin": membership.is_admin,
                    "created_at": membership.created_at,
                },
                "update": {"is_admin": membership.is_admin},
            },
        )

    async def delete(self, membership_id: str) -> bool:
        count = await self._prisma.member.delete_many(where={"id": membership_id})
        return count > 0
