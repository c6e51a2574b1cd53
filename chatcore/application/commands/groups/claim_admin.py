"""
Claim Admin Command - One-time migration of a legacy (admin-less) group.

Only the earliest member may claim, and only while no explicit admin exists.
The admin check is repeated under the conversation lock so two members who
both saw `needs_admin_claim` cannot both become admin.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from chatcore.application.common.guards import load_group
from chatcore.application.common.interfaces import Command, CommandHandler
from chatcore.application.services.identity_resolver import IdentityResolver
from chatcore.domain.exceptions import AccessDeniedError
from chatcore.domain.ports.lock_manager import LockManager
from chatcore.domain.ports.repositories import ConversationRepository, MembershipRepository
from chatcore.domain.services.admin_policy import earliest_membership, explicit_admins
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.token_identifier import TokenIdentifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClaimAdminCommand(Command[None]):
    caller: Optional[TokenIdentifier]
    conversation_id: ConversationId


class ClaimAdminHandler(CommandHandler[None]):
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

    async def execute(self, command: ClaimAdminCommand) -> None:
        me = await self._identity.require_caller(command.caller)
        async with self._locks.conversation(command.conversation_id):
            await load_group(self._conversations, command.conversation_id)
            members = await self._memberships.list_by_conversation(command.conversation_id)

            if not any(m.user_id == me.id for m in members):
                raise AccessDeniedError("Not a member of this conversation")
            if explicit_admins(members):
                logger.warning(
                    f"Admin claim by {me.id.value} on {command.conversation_id.value} "
                    "refused: group already has an admin"
                )
                raise AccessDeniedError("This group already has an admin")

            oldest = earliest_membership(members)
            if oldest is None or oldest.user_id != me.id:
                raise AccessDeniedError(
                    "Only the group creator can claim admin for legacy groups"
                )

            oldest.promote()
            await self._memberships.save(oldest)

        logger.info(f"{me.id.value} claimed admin of {command.conversation_id.value}")
