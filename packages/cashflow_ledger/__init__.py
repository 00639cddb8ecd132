"""Public interface for the ``cashflow_ledger`` package.

This module exposes the store, codec entry points and public models/types as
the stable import surface. There is no runtime logic here, only re-exports.
"""

from .codec import DecodedLedger, LoadResult, decode_ledger, encode_ledger
from .errors import DuplicateIdError, LedgerError, MalformedLedgerError, SnapshotError
from .index import CategoryIndex
from .models import TransactionRecord, format_record
from .store import INITIAL_COUNTER, LedgerStore

__all__ = [
    # Store / query surface
    "LedgerStore",
    "INITIAL_COUNTER",
    "CategoryIndex",
    # Codec
    "LoadResult",
    "DecodedLedger",
    "encode_ledger",
    "decode_ledger",
    # Models
    "TransactionRecord",
    "format_record",
    # Errors
    "LedgerError",
    "MalformedLedgerError",
    "DuplicateIdError",
    "SnapshotError",
]
