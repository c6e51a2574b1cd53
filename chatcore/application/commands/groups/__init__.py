"""Group lifecycle and admin governance commands."""

from .create_group import CreateGroupCommand, CreateGroupHandler
from .rename_group import RenameGroupCommand, RenameGroupHandler
from .add_member import AddMemberCommand, AddMemberHandler
from .remove_member import RemoveMemberCommand, RemoveMemberHandler
from .promote_admin import PromoteAdminCommand, PromoteAdminHandler
from .demote_admin import DemoteAdminCommand, DemoteAdminHandler
from .claim_admin import ClaimAdminCommand, ClaimAdminHandler

__all__ = [
    "CreateGroupCommand",
    "CreateGroupHandler",
    "RenameGroupCommand",
    "RenameGroupHandler",
    "AddMemberCommand",
    "AddMemberHandler",
    "RemoveMemberCommand",
    "RemoveMemberHandler",
    "PromoteAdminCommand",
    "PromoteAdminHandler",
    "DemoteAdminCommand",
    "DemoteAdminHandler",
    "ClaimAdminCommand",
    "ClaimAdminHandler",
]
