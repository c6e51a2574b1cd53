"""
Admin policy for group conversations.

Groups created before admin tracking have no Membership with `is_admin`.
For those the earliest Membership (by creation time, then id) is the
*effective* admin: shown as admin and allowed to claim it once. The effective
admin is always recomputed from the membership list, never stored.
"""

from dataclasses import dataclass
from typing import Optional

from chatcore.domain.entities.membership import Membership
from chatcore.domain.exceptions import InvalidOperationError
from chatcore.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class AdminView:
    admin_user_ids: frozenset[UserId]
    needs_admin_claim: bool

    def is_admin(self, user_id: UserId) -> bool:
        return user_id in self.admin_user_ids


def explicit_admins(memberships: list[Membership]) -> list[Membership]:
    return [m for m in memberships if m.is_admin]


def earliest_membership(memberships: list[Membership]) -> Optional[Membership]:
    if not memberships:
        return None
    return min(memberships, key=lambda m: (m.created_at, m.id))


def resolve_admin_view(memberships: list[Membership]) -> AdminView:
    admins = explicit_admins(memberships)
    if admins:
        return AdminView(frozenset(m.user_id for m in admins), needs_admin_claim=False)

    oldest = earliest_membership(memberships)
    effective = frozenset([oldest.user_id]) if oldest else frozenset()
    return AdminView(effective, needs_admin_claim=True)


def ensure_not_last_admin(memberships: list[Membership], target: Membership) -> None:
    """Raise if dropping `target`'s admin flag would leave no explicit admin."""
    if not target.is_admin:
        return
    if len(explicit_admins(memberships)) <= 1:
        raise InvalidOperationError("Cannot remove the last admin")
