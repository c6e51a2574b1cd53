"""Promote To Admin Command. Promoting an existing admin is a no-op."""

from dataclasses import dataclass
from typing import Optional
from chatcore.application.common.guards import assert_admin, load_group
from chatcore.application.common.interfaces import Command, CommandHandler
from chatcore.application.services.identity_resolver import IdentityResolver
from chatcore.domain.exceptions import EntityNotFoundError
from chatcore.domain.ports.lock_manager import LockManager
from chatcore.domain.ports.repositories import ConversationRepository, MembershipRepository
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.token_identifier import TokenIdentifier
from chatcore.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class PromoteAdminCommand(Command[None]):
    caller: Optional[TokenIdentifier]
    conversation_id: ConversationId
    user_id: UserId


class PromoteAdminHandler(CommandHandler[None]):
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

    async def execute(self, command: PromoteAdminCommand) -> None:
        me = await self._identity.require_caller(command.caller)
        async with self._locks.conversation(command.conversation_id):
            await load_group(self._conversations, command.conversation_id)
            await assert_admin(self._memberships, command.conversation_id, me.id)

            membership = await self._memberships.get(
                command.conversation_id, command.user_id
            )
            if not membership:
                raise EntityNotFoundError("User is not a member")
            if membership.is_admin:
                return
            membership.promote()
            await self._memberships.save(membership)
