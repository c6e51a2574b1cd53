"""chatcore - direct-message and group-chat backend."""

__version__ = "1.0.0"
