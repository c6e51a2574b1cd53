"""
Base interfaces for CQRS pattern.

Usage:
    @dataclass(frozen=True)
    class RenameGroupCommand(Command[None]):
        caller: Optional[TokenIdentifier]
        conversation_id: ConversationId
        name: str

    class RenameGroupHandler(CommandHandler[None]):
        def __init__(self, identity: IdentityResolver, ...):
            ...

        async def execute(self, command: RenameGroupCommand) -> None:
            me = await self._identity.require_caller(command.caller)
            ...
"""
from abc import ABC, abstractmethod
from typing import TypeVar, Generic

T = TypeVar("T")
class Command(ABC, Generic[T]):
    """Base class for write operations"""
    pass

class CommandHandler(ABC, Generic[T]):
    @abstractmethod
    async def execute(self, command: Command[T]) -> T:
        """Execute the command and return a result of type T"""
        ...

class Query(ABC, Generic[T]):
    """Base class for read operations"""
    pass

class QueryHandler(ABC, Generic[T]):
    @abstractmethod
    async def execute(self, query: Query[T]) -> T:
        """Execute the query and return a result of type T"""
        ...
