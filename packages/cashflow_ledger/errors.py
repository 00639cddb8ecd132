"""Exception types raised by ``cashflow_ledger``.

Not-found conditions (search/delete misses, a missing ledger file) are never
signaled with exceptions; see :class:`cashflow_ledger.codec.LoadResult`.
"""

from __future__ import annotations


class LedgerError(RuntimeError):
    """Base class for ledger failures."""


class MalformedLedgerError(LedgerError):
    """The binary ledger file does not match the expected layout."""

    def __init__(self, message: str, *, offset: int) -> None:
        super().__init__(f"{message} (at byte offset {offset})")
        self.offset = offset


class DuplicateIdError(LedgerError):
    """A record id appeared twice where ids must be unique."""

    def __init__(self, record_id: int, category: str | None = None) -> None:
        where = f" in category {category!r}" if category is not None else ""
        super().__init__(f"duplicate transaction id {record_id}{where}")
        self.record_id = record_id
        self.category = category


class SnapshotError(LedgerError):
    """A JSON snapshot could not be parsed or validated."""


__all__ = ["DuplicateIdError", "LedgerError", "MalformedLedgerError", "SnapshotError"]
