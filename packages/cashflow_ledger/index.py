"""Secondary index from category label to record ids.

The index is derived state: the store updates it on every add/delete, and a
load rebuilds it from the records as they are read. It is never persisted.
"""

from __future__ import annotations

from collections.abc import Iterable

from .errors import DuplicateIdError
from .models import TransactionRecord


class CategoryIndex:
    """Mapping of category label to the ids sharing it, in insertion order."""

    def __init__(self) -> None:
        self._buckets: dict[str, list[int]] = {}

    def add(self, category: str, record_id: int) -> None:
        bucket = self._buckets.setdefault(category, [])
        if record_id in bucket:
            raise DuplicateIdError(record_id, category)
        bucket.append(record_id)

    def remove(self, category: str, record_id: int) -> None:
        """Drop ``record_id`` from its bucket; a miss is a no-op.

        Empty buckets are removed so ``labels()`` only reports live categories.
        """

        bucket = self._buckets.get(category)
        if bucket is None:
            return
        try:
            bucket.remove(record_id)
        except ValueError:
            return
        if not bucket:
            del self._buckets[category]

    def ids(self, category: str) -> tuple[int, ...]:
        return tuple(self._buckets.get(category, ()))

    def labels(self) -> list[str]:
        return list(self._buckets)

    def clear(self) -> None:
        self._buckets.clear()

    def rebuild(self, records: Iterable[TransactionRecord]) -> None:
        self.clear()
        for record in records:
            self.add(record.category, record.id)

    def __len__(self) -> int:
        return len(self._buckets)
