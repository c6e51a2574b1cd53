"""
Remove Member Command.

Refuses to remove the last explicit admin. The admin count check and the
delete run under the conversation lock so two concurrent removals cannot
both see "2 admins left".
"""

import logging
from dataclasses import dataclass
from typing import Optional
from chatcore.application.common.guards import assert_admin, load_group
from chatcore.application.common.interfaces import Command, CommandHandler
from chatcore.application.services.identity_resolver import IdentityResolver
from chatcore.domain.exceptions import EntityNotFoundError
from chatcore.domain.ports.lock_manager import LockManager
from chatcore.domain.ports.repositories import ConversationRepository, MembershipRepository
from chatcore.domain.services.admin_policy import ensure_not_last_admin
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.token_identifier import TokenIdentifier
from chatcore.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemoveMemberCommand(Command[None]):
    caller: Optional[TokenIdentifier]
    conversation_id: ConversationId
    user_id: UserId


class RemoveMemberHandler(CommandHandler[None]):
    def __init__(
        self,
        identity: IdentityResolver,
        conversation_repository: ConversationRepository,
        membership_repository: MembershipRepository,
        lock_manager: LockManager,
    ):
        self._identity = identity
        self._conversations = conversation_repository
        self._memberships = membership_repository
        self._locks = lock_manager

    async def execute(self, command: RemoveMemberCommand) -> None:
        me = await self._identity.require_caller(command.caller)
        async with self._locks.conversation(command.conversation_id):
            await load_group(self._conversations, command.conversation_id)
            await assert_admin(self._memberships, command.conversation_id, me.id)

            members = await self._memberships.list_by_conversation(command.conversation_id)
            target = next((m for m in members if m.user_id == command.user_id), None)
            if not target:
                raise EntityNotFoundError("User is not a member")
            ensure_not_last_admin(members, target)

            await self._memberships.delete(target.id)

        logger.info(
            f"{me.id.value} removed {command.user_id.value} "
            f"from group {command.conversation_id.value}"
        )
