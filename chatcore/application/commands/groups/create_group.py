"""
Create Group Command.

- Members are member_ids plus the creator, de-duplicated
- Only the creator's membership is created as admin
"""

import logging
from dataclasses import dataclass, field
from typing import Optional
from chatcore.application.common.interfaces import Command, CommandHandler
from chatcore.application.services.identity_resolver import IdentityResolver
from chatcore.domain.entities.conversation import Conversation
from chatcore.domain.entities.membership import Membership
from chatcore.domain.exceptions import EntityNotFoundError
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
class CreateGroupCommand(Command[ConversationId]):
    caller: Optional[TokenIdentifier]
    name: str
    member_ids: tuple[UserId, ...] = field(default_factory=tuple)


class CreateGroupHandler(CommandHandler[ConversationId]):
    def __init__(
        self,
        identity: IdentityResolver,
        user_repository: UserRepository,
        conversation_repository: ConversationRepository,
        membership_repository: MembershipRepository,
    ):
        self._identity = identity
        self._users = user_repository
        self._conversations = conversation_repository
        self._memberships = membership_repository

    async def execute(self, command: CreateGroupCommand) -> ConversationId:
        me = await self._identity.require_caller(command.caller)
        conversation = Conversation.create_group(command.name)

        # dict.fromkeys keeps the first occurrence order
        member_ids = list(dict.fromkeys([*command.member_ids, me.id]))
        for member_id in member_ids:
            if member_id != me.id and not await self._users.get_by_id(member_id):
                raise EntityNotFoundError(f"User {member_id.value} not found")

        await self._conversations.save(conversation)
        for member_id in member_ids:
            await self._memberships.save(
                Membership.create(member_id, conversation.id, is_admin=member_id == me.id)
            )

        logger.info(
            f"User {me.id.value} created group {conversation.id.value} "
            f"with {len(member_ids)} members"
        )
        return conversation.id
