"""
In-memory document store.

One table (insertion-ordered dict keyed by record id) per record kind.
Records are copied on the way in and out, so an entity mutated by a handler
is only visible to other requests once it is saved, like a real store.
"""

import copy
from typing import Generic, Iterator, Optional, TypeVar

T = TypeVar("T")


class Table(Generic[T]):
    def __init__(self, name: str):
        self.name = name
        self._rows: dict[str, T] = {}

    def get(self, key: str) -> Optional[T]:
        row = self._rows.get(key)
        return copy.deepcopy(row) if row is not None else None

    def put(self, key: str, row: T) -> None:
        self._rows[key] = copy.deepcopy(row)

    def remove(self, key: str) -> bool:
        return self._rows.pop(key, None) is not None

    def scan(self) -> Iterator[T]:
        """Copies of every row, in insertion order."""
        for row in list(self._rows.values()):
            yield copy.deepcopy(row)

    def __len__(self) -> int:
        return len(self._rows)


class InMemoryDocumentStore:
    """Holds the six tables; one instance is shared by the whole app."""

    def __init__(self):
        self.users = Table("users")
        self.conversations = Table("conversations")
        self.members = Table("members")
        self.messages = Table("messages")
        self.reactions = Table("reactions")
        self.typing_indicators = Table("typing_indicators")
