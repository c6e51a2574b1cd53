"""Group queries."""

from chatcore.application.queries.groups.get_group_details import (
    GetGroupDetailsQuery,
    GetGroupDetailsHandler,
)

__all__ = [
    "GetGroupDetailsQuery",
    "GetGroupDetailsHandler",
]
