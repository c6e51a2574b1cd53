"""
Prisma User Repository Implementation.

Mapping:
- Prisma model fields: id, name, email, image, token_identifier, is_online, created_at
- Domain entity: User with value objects (UserId, UserEmail, TokenIdentifier)
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional
from chatcore.domain.entities.user import User
from chatcore.domain.ports.repositories import UserRepository
from chatcore.domain.value_objects.token_identifier import TokenIdentifier
from chatcore.domain.value_objects.user_email import UserEmail
from chatcore.domain.value_objects.user_id import UserId

if TYPE_CHECKING:
    from prisma import Prisma
    from prisma.models import User as PrismaUser


class PrismaUserRepository(UserRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaUser) -> User:
        """Map Prisma record to domain entity."""
        return User(
            id=UserId(record.id),
            email=UserEmail(record.email),
            token_identifier=TokenIdentifier(record.token_identifier),
            is_online=record.is_online,
            name=record.name,
            image=record.image,
            created_at=record.created_at,
        )

    async def get_by_id(self, user_id: UserId) -> Optional[User]:
        record = await self._prisma.user.find_unique(where={"id": user_id.value})
        return self._to_entity(record) if record else None

    async def get_by_token(self, token_identifier: TokenIdentifier) -> Optional[User]:
        record = await self._prisma.user.find_unique(
            where={"token_identifier": token_identifier.value}
        )
        return self._to_entity(record) if record else None

    async def list_all(self) -> list[User]:
        records = await self._prisma.user.find_many(order={"created_at": "asc"})
        return [self._to_entity(record) for record in records]

    async def save(self, user: User) -> None:
        """Save (create or update) user."""
        await self._prisma.user.upsert(
            where={"id": user.id.value},
            data={
                "create": {
                    "id": user.id.value,
                    "name": user.name,
                    "email": user.email.value,
                    "image": user.image,
                    "token_identifier": user.token_identifier.value,
                    "is_online": user.is_online,
                    "created_at": user.created_at,
                },
                "update": {
                    "name": user.name,
                    "email": user.email.value,
                    "image": user.image,
                    "is_online": user.is_online,
                },
            },
        )
