"""
ReadReceipts Value Object - The set of users who have read a message.

Append-only, add-if-absent. The sender of a message is never recorded as a
reader; `with_reader` refuses them so the check and the invariant live in
one place.
"""

from __future__ import annotations
from dataclasses import dataclass

from chatcore.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class ReadReceipts:
    readers: tuple[UserId, ...] = ()

    def __post_init__(self):
        if len(set(self.readers)) != len(self.readers):
            raise ValueError("ReadReceipts cannot contain duplicate readers")

    @classmethod
    def of(cls, user_ids: list[str] | None) -> ReadReceipts:
        """Build from raw stored ids, dropping duplicates."""
        seen: list[UserId] = []
        for raw in user_ids or []:
            user_id = UserId(raw)
            if user_id not in seen:
                seen.append(user_id)
        return cls(tuple(seen))

    def __contains__(self, user_id: object) -> bool:
        return user_id in self.readers

    def __len__(self) -> int:
        return len(self.readers)

    def __iter__(self):
        return iter(self.readers)

    def with_reader(self, reader: UserId, sender: UserId) -> ReadReceipts:
        """Return receipts including `reader`; unchanged if already present or the sender."""
        if reader == sender or reader in self.readers:
            return self
        return ReadReceipts(self.readers + (reader,))

    def to_list(self) -> list[str]:
        return [reader.value for reader in self.readers]
