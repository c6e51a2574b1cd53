"""Search Users Query - everyone except the caller, optionally filtered by name."""

from dataclasses import dataclass
from typing import Optional
from chatcore.application.common.interfaces import Query, QueryHandler
from chatcore.application.dto.user import UserDTO
from chatcore.domain.ports.repositories import UserRepository
from chatcore.domain.value_objects.token_identifier import TokenIdentifier


@dataclass(frozen=True)
class SearchUsersQuery(Query[list[UserDTO]]):
    caller: Optional[TokenIdentifier]
    search_term: Optional[str] = None
    limit: int = 100


class SearchUsersHandler(QueryHandler[list[UserDTO]]):
    def __init__(self, user_repository: UserRepository):
        self._user_repository = user_repository

    async def execute(self, query: SearchUsersQuery) -> list[UserDTO]:
        if query.caller is None:
            return []

        users = await self._user_repository.list_all()
        users = [u for u in users if u.token_identifier != query.caller]

        term = (query.search_term or "").strip().lower()
        if term:
            users = [u for u in users if u.name and term in u.name.lower()]

        return [UserDTO.from_entity(u) for u in users[: query.limit]]
