"""
DOMAIN SERVICES - Pure functions over entities (no I/O).

- admin_policy → explicit/effective group admins, last-admin protection
- reactions    → per-viewer reaction summaries
- read_state   → unread counts
"""

from chatcore.domain.services.admin_policy import (
    AdminView,
    earliest_membership,
    ensure_not_last_admin,
    explicit_admins,
    resolve_admin_view,
)
from chatcore.domain.services.reactions import ReactionSummary, summarize_reactions
from chatcore.domain.services.read_state import unread_count

__all__ = [
    "AdminView",
    "earliest_membership",
    "ensure_not_last_admin",
    "explicit_admins",
    "resolve_admin_view",
    "ReactionSummary",
    "summarize_reactions",
    "unread_count",
]
