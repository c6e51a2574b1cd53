"""
PORTS - Interfaces that infrastructure implements

A "port" is an abstract interface that defines WHAT the domain needs,
without specifying HOW it's done.

Subfolders:
- repositories/  → Document store interfaces (one per record kind)
- (root files)   → Other external service interfaces (locks)
"""

from chatcore.domain.ports.lock_manager import LockManager

__all__ = ["LockManager"]
