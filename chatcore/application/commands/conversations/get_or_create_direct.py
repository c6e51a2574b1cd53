"""
Get Or Create Direct Conversation Command.

Resolves the single non-group conversation between the caller and another
user, creating it on first contact.

Steps:
1. Refuse self-messaging
2. Look up by the canonical pair key
3. Fall back to intersecting both users' memberships (conversations that
   predate the pair key); the earliest created match wins
4. Otherwise create the conversation and both memberships

The whole sequence holds the pair lock so two first messages racing each
other cannot create two conversations.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from chatcore.application.common.interfaces import Command, CommandHandler
from chatcore.application.services.identity_resolver import IdentityResolver
from chatcore.domain.entities.conversation import Conversation, direct_key_for
from chatcore.domain.entities.membership import Membership
from chatcore.domain.exceptions import EntityNotFoundError, InvalidOperationError
from chatcore.domain.ports.lock_manager import LockManager
from chatcore.domain.ports.repositories import (
    ConversationRepository,
    MembershipRepository,
    UserRepository,
)
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.token_identifier import TokenIdentifier
from chatcore.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetOrCreateDirectCommand(Command[ConversationId]):
    caller: Optional[TokenIdentifier]
    other_user_id: UserId


class GetOrCreateDirectHandler(CommandHandler[ConversationId]):
    def __init__(
        self,
        identity: IdentityResolver,
        user_repository: UserRepository,
        conversation_repository: ConversationRepository,
        membership_repository: MembershipRepository,
        lock_manager: LockManager,
    ):
        self._identity = identity
        self._users = user_repository
        self._conversations = conversation_repository
        self._memberships = membership_repository
        self._locks = lock_manager

    async def execute(self, command: GetOrCreateDirectCommand) -> ConversationId:
        me = await self._identity.require_caller(command.caller)
        other_id = command.other_user_id
        if me.id == other_id:
            raise InvalidOperationError("Cannot message yourself")
        if not await self._users.get_by_id(other_id):
            raise EntityNotFoundError(f"User {other_id.value} not found")

        direct_key = direct_key_for(me.id, other_id)
        async with self._locks.direct_pair(direct_key):
            existing = await self._conversations.get_by_direct_key(direct_key)
            if existing:
                return existing.id

            legacy = await self._find_shared_direct(me.id, other_id)
            if legacy:
                return legacy.id

            conversation = Conversation.create_direct(me.id, other_id)
            await self._conversations.save(conversation)
            await self._memberships.save(Membership.create(me.id, conversation.id))
            await self._memberships.save(Membership.create(other_id, conversation.id))

        logger.info(
            f"Created direct conversation {conversation.id.value} "
            f"between {me.id.value} and {other_id.value}"
        )
        return conversation.id

    async def _find_shared_direct(
        self, first: UserId, second: UserId
    ) -> Optional[Conversation]:
        mine = {m.conversation_id for m in await self._memberships.list_by_user(first)}
        theirs = {m.conversation_id for m in await self._memberships.list_by_user(second)}

        candidates = []
        for conversation_id in mine & theirs:
            conversation = await self._conversations.get_by_id(conversation_id)
            if conversation and not conversation.is_group:
                candidates.append(conversation)
        if not candidates:
            return None
        return min(candidates, key=lambda c: (c.created_at, c.id.value))
