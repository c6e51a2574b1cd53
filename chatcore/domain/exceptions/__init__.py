"""
DOMAIN EXCEPTIONS - Business rule violations

These exceptions are raised by domain and application logic and caught by the
presentation layer, which maps them to HTTP status codes.
"""

from chatcore.domain.exceptions.base import DomainError
from chatcore.domain.exceptions.unauthenticated import UnauthenticatedError
from chatcore.domain.exceptions.entity_not_found import EntityNotFoundError
from chatcore.domain.exceptions.access_denied import AccessDeniedError
from chatcore.domain.exceptions.conflict import ConflictError
from chatcore.domain.exceptions.invalid_operation import InvalidOperationError

__all__ = [
    "DomainError",
    "UnauthenticatedError",
    "EntityNotFoundError",
    "AccessDeniedError",
    "ConflictError",
    "InvalidOperationError",
]
