"""
List Typing Users Query.

Expiry is enforced here by filtering on expires_at; stale indicators stay in
storage until the user types again or stops.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional
from chatcore.application.commands.presence.set_typing import utc_now
from chatcore.application.common.interfaces import Query, QueryHandler
from chatcore.application.dto.user import UserDTO
from chatcore.application.services.identity_resolver import IdentityResolver
from chatcore.domain.ports.repositories import TypingIndicatorRepository, UserRepository
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.token_identifier import TokenIdentifier


@dataclass(frozen=True)
class ListTypingUsersQuery(Query[list[UserDTO]]):
    caller: Optional[TokenIdentifier]
    conversation_id: ConversationId


class ListTypingUsersHandler(QueryHandler[list[UserDTO]]):
    def __init__(
        self,
        identity: IdentityResolver,
        user_repository: UserRepository,
        typing_repository: TypingIndicatorRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._identity = identity
        self._users = user_repository
        self._typing = typing_repository
        self._clock = clock

    async def execute(self, query: ListTypingUsersQuery) -> list[UserDTO]:
        me = await self._identity.resolve_caller(query.caller)
        if not me:
            return []

        now = self._clock()
        typing_users = []
        for indicator in await self._typing.get_by_conversation(query.conversation_id):
            if indicator.user_id == me.id or not indicator.is_active(now):
                continue
            user = await self._users.get_by_id(indicator.user_id)
            if user:
                typing_users.append(UserDTO.from_entity(user))
        return typing_users
