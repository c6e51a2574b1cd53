"""Application services shared across handlers."""

from chatcore.application.services.identity_resolver import IdentityResolver

__all__ = ["IdentityResolver"]
