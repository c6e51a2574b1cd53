"""Typing presence queries."""

from chatcore.application.queries.presence.list_typing_users import (
    ListTypingUsersQuery,
    ListTypingUsersHandler,
)

__all__ = [
    "ListTypingUsersQuery",
    "ListTypingUsersHandler",
]
