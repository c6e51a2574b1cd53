"""Add Member Command."""

import logging
from dataclasses import dataclass
from typing import Optional
from chatcore.application.common.guards import assert_admin, load_group
from chatcore.application.common.interfaces import Command, CommandHandler
from chatcore.application.services.identity_resolver import IdentityResolver
from chatcore.domain.entities.membership import Membership
from chatcore.domain.exceptions import ConflictError, EntityNotFoundError
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
class AddMemberCommand(Command[None]):
    caller: Optional[TokenIdentifier]
    conversation_id: ConversationId
    user_id: UserId


class AddMemberHandler(CommandHandler[None]):
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

    async def execute(self, command: AddMemberCommand) -> None:
        me = await self._identity.require_caller(command.caller)
        async with self._locks.conversation(command.conversation_id):
            await load_group(self._conversations, command.conversation_id)
            await assert_admin(self._memberships, command.conversation_id, me.id)

            if not await self._users.get_by_id(command.user_id):
                raise EntityNotFoundError(f"User {command.user_id.value} not found")
            if await self._memberships.get(command.conversation_id, command.user_id):
                raise ConflictError("User is already a member")

            await self._memberships.save(
                Membership.create(command.user_id, command.conversation_id)
            )

        logger.info(
            f"{me.id.value} added {command.user_id.value} "
            f"to group {command.conversation_id.value}"
        )
