"""JSON snapshot export/import.

The snapshot is a human-readable companion to the binary ledger::

    {"transactions": [{"id": "1", "datetime": "...", "seller": "...",
                       "buyer": "...", "merchandise": "...", "cost": "19.99",
                       "currency": "USD", "category": "..."}, ...]}

Importing replays every row through ``add_data`` after clearing the store,
so ids are reassigned from 1 in document order. The ``id`` column is kept
for reference only.

Atomicity: writes target ``.tmp`` first and then ``os.replace`` into place.
"""

from __future__ import annotations

import contextlib
import json
import os
from pathlib import Path

from pydantic import ValidationError

from .errors import SnapshotError
from .logging_setup import get_logger
from .models import LedgerSnapshot, SnapshotRecord
from .store import LedgerStore

_logger = get_logger("cashflow_ledger.snapshot")


def build_snapshot(store: LedgerStore) -> LedgerSnapshot:
    return LedgerSnapshot(
        transactions=[SnapshotRecord.from_record(r) for r in store.list_data_entries()]
    )


def export_snapshot(store: LedgerStore, path: str | os.PathLike[str]) -> int:
    """Write ``store`` to ``path`` as JSON and return the number of rows."""

    target = Path(path)
    tmp = target.with_suffix(target.suffix + ".tmp")
    snapshot = build_snapshot(store)

    try:
        tmp.write_text(
            json.dumps(snapshot.model_dump(mode="json"), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        os.replace(tmp, target)
    except Exception:
        with contextlib.suppress(FileNotFoundError):
            tmp.unlink()
        raise

    _logger.info(
        "snapshot:exported path=%s records=%d", os.fspath(target), len(snapshot.transactions)
    )
    return len(snapshot.transactions)


def parse_snapshot(text: str) -> LedgerSnapshot:
    try:
        return LedgerSnapshot.model_validate_json(text)
    except ValidationError as e:
        raise SnapshotError(f"invalid snapshot: {e}") from e


def import_snapshot(store: LedgerStore, path: str | os.PathLike[str]) -> int:
    """Replace the contents of ``store`` with the rows of the snapshot at ``path``.

    The file is validated before the store is touched; on
    :class:`SnapshotError` the store is unchanged. A missing file raises
    ``FileNotFoundError``.
    """

    text = Path(path).read_text(encoding="utf-8")
    snapshot = parse_snapshot(text)

    store.clear()
    for row in snapshot.transactions:
        store.add_data(
            row.datetime,
            row.seller,
            row.buyer,
            row.merchandise,
            float(row.cost),
            row.currency,
            row.category,
        )

    _logger.info(
        "snapshot:imported path=%s records=%d", os.fspath(path), len(snapshot.transactions)
    )
    return len(snapshot.transactions)
