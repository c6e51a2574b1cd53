"""User commands."""

from .sync_identity import SyncIdentityCommand, SyncIdentityHandler
from .set_online_status import SetOnlineStatusCommand, SetOnlineStatusHandler

__all__ = [
    "SyncIdentityCommand",
    "SyncIdentityHandler",
    "SetOnlineStatusCommand",
    "SetOnlineStatusHandler",
]
