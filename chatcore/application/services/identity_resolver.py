"""
Identity Resolver - Maps a caller's token identifier to an application User.

Queries use `resolve_caller` and degrade to empty results on None; commands
use `require_caller`, which raises UnauthenticatedError.
"""

import logging
from typing import Optional

from chatcore.domain.entities.user import User
from chatcore.domain.exceptions import UnauthenticatedError
from chatcore.domain.ports.repositories import UserRepository
from chatcore.domain.value_objects.token_identifier import TokenIdentifier

logger = logging.getLogger(__name__)


class IdentityResolver:
    def __init__(self, user_repository: UserRepository):
        self._user_repository = user_repository

    async def resolve_caller(
        self, token_identifier: Optional[TokenIdentifier]
    ) -> Optional[User]:
        if token_identifier is None:
            return None
        return await self._user_repository.get_by_token(token_identifier)

    async def require_caller(self, token_identifier: Optional[TokenIdentifier]) -> User:
        if token_identifier is None:
            raise UnauthenticatedError("Unauthorized")
        user = await self._user_repository.get_by_token(token_identifier)
        if not user:
            logger.warning(f"No user synced for token {token_identifier.value}")
            raise UnauthenticatedError("User not found")
        return user
