"""In-memory transaction store.

``LedgerStore`` owns the ordered record sequence, the next-id counter and the
:class:`~cashflow_ledger.index.CategoryIndex`. Together with ``save``/``load``
its methods are the whole surface seen by callers:

- ``add_data``: assign the next id and append a record
- ``search_data_entries``: find a record by id (``None`` when absent)
- ``list_data_entries``: iterate live records in order
- ``get_all_data_entries``: independent snapshot list
- ``delete_data``: remove by id; a miss is a no-op
- ``clear``: empty everything and reset the counter to 1

The store is single-threaded. Hosts that drive it from several threads must
serialize access themselves.

Persistence is explicit. Nothing is written on garbage collection; owners
call :meth:`LedgerStore.save` on shutdown or use the store as a context
manager, which saves when the block exits without an exception.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path
from types import TracebackType

from .codec import LoadResult, read_ledger_file, write_ledger_file
from .config import load_settings
from .index import CategoryIndex
from .logging_setup import get_logger
from .models import TransactionRecord

INITIAL_COUNTER = 1

_logger = get_logger("cashflow_ledger.store")


class LedgerStore:
    def __init__(self, path: str | os.PathLike[str] | None = None, *, autoload: bool = True):
        """Create a store bound to ``path`` (default: ``CASHFLOW_DATA_FILE``).

        With ``autoload`` the file is loaded immediately; any failure leaves
        the store empty with the counter at 1. The result is kept on
        ``last_load_result``.
        """

        self.path = Path(path) if path is not None else load_settings().data_file
        self._records: list[TransactionRecord] = []
        self._index = CategoryIndex()
        self._counter = INITIAL_COUNTER
        self.last_load_result: LoadResult | None = None
        if autoload:
            self.load()

    # ------------------------------------------------------------------
    # Record store
    # ------------------------------------------------------------------

    def add_data(
        self,
        timestamp: str,
        seller: str,
        buyer: str,
        merchandise: str,
        cost: float,
        currency: str,
        category: str,
    ) -> TransactionRecord:
        record = TransactionRecord(
            id=self._counter,
            timestamp=timestamp,
            seller=seller,
            buyer=buyer,
            merchandise=merchandise,
            cost=cost,
            currency=currency,
            category=category,
        )
        self._index.add(category, record.id)
        self._counter += 1
        self._records.append(record)
        _logger.debug("store:add id=%d category=%s", record.id, category)
        return record

    def search_data_entries(self, record_id: int) -> TransactionRecord | None:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def list_data_entries(self) -> Iterator[TransactionRecord]:
        return iter(tuple(self._records))

    def get_all_data_entries(self) -> list[TransactionRecord]:
        return list(self._records)

    def delete_data(self, record_id: int) -> None:
        for pos, record in enumerate(self._records):
            if record.id == record_id:
                self._index.remove(record.category, record_id)
                del self._records[pos]
                _logger.debug("store:delete id=%d category=%s", record_id, record.category)
                return

    def clear(self) -> None:
        self._records.clear()
        self._index.clear()
        self._counter = INITIAL_COUNTER

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, path: str | os.PathLike[str] | None = None) -> bool:
        """Write the ledger to ``path`` (default: the bound path)."""

        target = path if path is not None else self.path
        return write_ledger_file(target, self._counter, self._records)

    def load(self, path: str | os.PathLike[str] | None = None) -> LoadResult:
        """Replace the contents of the store with the file at ``path``.

        Returns :attr:`LoadResult.NOT_FOUND` for a missing file (first run),
        :attr:`LoadResult.IO_ERROR` for an unreadable one and
        :attr:`LoadResult.MALFORMED` for a corrupt one. The store is empty in
        all three cases.
        """

        target = path if path is not None else self.path
        self.clear()
        result, decoded = read_ledger_file(target)
        if decoded is not None:
            self._records = list(decoded.records)
            self._index.rebuild(self._records)
            self._counter = decoded.counter
            _logger.info(
                "ledger:loaded path=%s records=%d counter=%d",
                os.fspath(target),
                len(self._records),
                self._counter,
            )
        self.last_load_result = result
        return result

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def counter(self) -> int:
        """The id the next ``add_data`` call will assign."""
        return self._counter

    @property
    def is_empty(self) -> bool:
        return not self._records and self._counter == INITIAL_COUNTER

    def ids_for_category(self, category: str) -> tuple[int, ...]:
        return self._index.ids(category)

    def categories(self) -> list[str]:
        return self._index.labels()

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[TransactionRecord]:
        return self.list_data_entries()

    def __contains__(self, record_id: object) -> bool:
        return any(r.id == record_id for r in self._records)

    def __enter__(self) -> LedgerStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is None and not self.save():
            _logger.error("store:save_on_exit_failed path=%s", os.fspath(self.path))

    def __repr__(self) -> str:
        return f"LedgerStore(path={os.fspath(self.path)!r}, records={len(self)}, counter={self._counter})"
