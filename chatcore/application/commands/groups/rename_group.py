"""Rename Group Command."""

from dataclasses import dataclass
from typing import Optional
from chatcore.application.common.guards import assert_admin, load_group
from chatcore.application.common.interfaces import Command, CommandHandler
from chatcore.application.services.identity_resolver import IdentityResolver
from chatcore.domain.ports.lock_manager import LockManager
from chatcore.domain.ports.repositories import ConversationRepository, MembershipRepository
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.token_identifier import TokenIdentifier


@dataclass(frozen=True)
class RenameGroupCommand(Command[None]):
    caller: Optional[TokenIdentifier]
    conversation_id: ConversationId
    name: str


class RenameGroupHandler(CommandHandler[None]):
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

    async def execute(self, command: RenameGroupCommand) -> None:
        me = await self._identity.require_caller(command.caller)

        # Shares the conversation row with send's last_message_id update
        async with self._locks.conversation(command.conversation_id):
            conversation = await load_group(self._conversations, command.conversation_id)
            await assert_admin(self._memberships, command.conversation_id, me.id)

            conversation.rename(command.name)
            await self._conversations.save(conversation)
