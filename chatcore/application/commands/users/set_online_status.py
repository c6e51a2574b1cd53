"""Set Online Status Command. Best-effort liveness hint; no-op for unknown callers."""

from dataclasses import dataclass
from typing import Optional
from chatcore.application.common.interfaces import Command, CommandHandler
from chatcore.application.services.identity_resolver import IdentityResolver
from chatcore.domain.ports.repositories import UserRepository
from chatcore.domain.value_objects.token_identifier import TokenIdentifier


@dataclass(frozen=True)
class SetOnlineStatusCommand(Command[None]):
    caller: Optional[TokenIdentifier]
    is_online: bool


class SetOnlineStatusHandler(CommandHandler[None]):
    def __init__(self, identity: IdentityResolver, user_repository: UserRepository):
        self._identity = identity
        self._user_repository = user_repository

    async def execute(self, command: SetOnlineStatusCommand) -> None:
        user = await self._identity.resolve_caller(command.caller)
        if not user:
            return
        user.set_online(command.is_online)
        await self._user_repository.save(user)
