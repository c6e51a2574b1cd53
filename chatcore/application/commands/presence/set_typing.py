"""
Set Typing Command.

The UI re-sends is_typing=True on every keystroke and False after a short
pause; this handler only stores the TTL. Anonymous callers and non-members
are ignored silently.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional
from chatcore.application.common.interfaces import Command, CommandHandler
from chatcore.application.services.identity_resolver import IdentityResolver
from chatcore.domain.entities.typing_indicator import TypingIndicator
from chatcore.domain.ports.lock_manager import LockManager
from chatcore.domain.ports.repositories import (
    MembershipRepository,
    TypingIndicatorRepository,
)
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.token_identifier import TokenIdentifier

DEFAULT_TYPING_TTL_SECONDS = 3.0


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SetTypingCommand(Command[None]):
    caller: Optional[TokenIdentifier]
    conversation_id: ConversationId
    is_typing: bool


class SetTypingHandler(CommandHandler[None]):
    def __init__(
        self,
        identity: IdentityResolver,
        membership_repository: MembershipRepository,
        typing_repository: TypingIndicatorRepository,
        lock_manager: LockManager,
        ttl_seconds: float = DEFAULT_TYPING_TTL_SECONDS,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._identity = identity
        self._memberships = membership_repository
        self._typing = typing_repository
        self._locks = lock_manager
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    async def execute(self, command: SetTypingCommand) -> None:
        me = await self._identity.resolve_caller(command.caller)
        if not me:
            return
        if not await self._memberships.get(command.conversation_id, me.id):
            return

        async with self._locks.conversation(command.conversation_id):
            existing = await self._typing.get(command.conversation_id, me.id)
            if not command.is_typing:
                if existing:
                    await self._typing.delete(existing.id)
                return

            now = self._clock()
            if existing:
                existing.refresh(now, self._ttl_seconds)
                await self._typing.save(existing)
            else:
                await self._typing.save(
                    TypingIndicator.start(
                        command.conversation_id, me.id, now, self._ttl_seconds
                    )
                )
