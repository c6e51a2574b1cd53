"""
ConflictError - Raised when a record that must be unique already exists.
Maps to: HTTP 409 Conflict
"""

from chatcore.domain.exceptions.base import DomainError


class ConflictError(DomainError):
    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message)
