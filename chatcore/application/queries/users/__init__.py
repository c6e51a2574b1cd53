"""User queries."""

from chatcore.application.queries.users.search_users import (
    SearchUsersQuery,
    SearchUsersHandler,
)

__all__ = [
    "SearchUsersQuery",
    "SearchUsersHandler",
]
