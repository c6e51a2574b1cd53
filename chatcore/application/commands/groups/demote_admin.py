"""
Demote Admin Command.

Demoting the only explicit admin is refused; demoting a non-admin is a no-op.
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
class DemoteAdminCommand(Command[None]):
    caller: Optional[TokenIdentifier]
    conversation_id: ConversationId
    user_id: UserId


class DemoteAdminHandler(CommandHandler[None]):
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

    async def execute(self, command: DemoteAdminCommand) -> None:
        me = await self._identity.require_caller(command.caller)
        async with self._locks.conversation(command.conversation_id):
            await load_group(self._conversations, command.conversation_id)
            await assert_admin(self._memberships, command.conversation_id, me.id)

            members = await self._memberships.list_by_conversation(command.conversation_id)
            target = next((m for m in members if m.user_id == command.user_id), None)
            if not target:
                raise EntityNotFoundError("User is not a member")
            if not target.is_admin:
                return
            ensure_not_last_admin(members, target)

            target.demote()
            await self._memberships.save(target)

        logger.info(
            f"{me.id.value} demoted {command.user_id.value} "
            f"in group {command.conversation_id.value}"
        )
