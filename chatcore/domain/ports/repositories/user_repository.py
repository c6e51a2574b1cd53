"""
User Repository Port - Interface for user persistence.
Implementations: chatcore/infrastructure/persistence/{memory,prisma}/
"""

from abc import ABC, abstractmethod
from typing import Optional
from chatcore.domain.entities.user import User
from chatcore.domain.value_objects.token_identifier import TokenIdentifier
from chatcore.domain.value_objects.user_id import UserId


class UserRepository(ABC):
    @abstractmethod
    async def get_by_id(self, user_id: UserId) -> Optional[User]: ...

    @abstractmethod
    async def get_by_token(self, token_identifier: TokenIdentifier) -> Optional[User]: ...

    @abstractmethod
    async def list_all(self) -> list[User]: ...

    @abstractmethod
    async def save(self, user: User) -> None: ...
