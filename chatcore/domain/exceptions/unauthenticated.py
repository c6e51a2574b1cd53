"""
UnauthenticatedError - Raised when an operation needs a caller and none resolves.
Maps to: HTTP 401 Unauthorized
"""

from chatcore.domain.exceptions.base import DomainError


class UnauthenticatedError(DomainError):
    """Raised when no application user matches the request's credential"""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)
