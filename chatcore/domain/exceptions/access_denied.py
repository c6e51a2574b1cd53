"""
AccessDeniedError - Raised when the caller lacks membership, admin rights or ownership.
Maps to: HTTP 403 Forbidden
"""

from chatcore.domain.exceptions.base import DomainError


class AccessDeniedError(DomainError):
    """Raised when user lacks permission to access a resource"""

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)
