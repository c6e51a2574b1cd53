"""
InvalidOperationError - Raised when a business rule forbids the requested change.
Maps to: HTTP 422 Unprocessable Entity
"""

from chatcore.domain.exceptions.base import DomainError


class InvalidOperationError(DomainError):
    """Exception raised for rule violations such as removing the last admin."""

    def __init__(self, message: str):
        super().__init__(message)
