"""
DomainError - Common base for every user-presentable rule violation.
"""


class DomainError(Exception):
    """Base class for domain errors; `message` is safe to show to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
