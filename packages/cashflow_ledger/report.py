"""Report helpers: date-range and category filtering over ledger records.

Timestamps are free text. Only those whose part before the first comma is a
``YYYY-MM-DD`` date take part in a date-range report; others are skipped.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime

from .models import TransactionRecord


def parse_entry_date(timestamp: str) -> date | None:
    head = timestamp.split(",", 1)[0].strip()
    try:
        return datetime.strptime(head, "%Y-%m-%d").date()
    except ValueError:
        return None


def filter_records(
    records: Iterable[TransactionRecord],
    *,
    start: date,
    end: date,
    category: str | None = None,
) -> list[TransactionRecord]:
    """Return records dated within ``[start, end]`` and matching ``category``.

    ``category`` is trimmed and compared case-insensitively with each record's
    category as stored (not trimmed); ``None`` or an empty string matches
    every category.
    """

    if start > end:
        raise ValueError(f"invalid date range: {start.isoformat()} > {end.isoformat()}")

    wanted = (category or "").strip().lower()
    out: list[TransactionRecord] = []
    for record in records:
        d = parse_entry_date(record.timestamp)
        if d is None or not (start <= d <= end):
            continue
        if wanted and record.category.lower() != wanted:
            continue
        out.append(record)
    return out


def totals_by_category(records: Iterable[TransactionRecord]) -> dict[str, dict[str, float]]:
    """Sum ``cost`` per category, then per currency."""

    totals: dict[str, dict[str, float]] = {}
    for record in records:
        per_currency = totals.setdefault(record.category, {})
        per_currency[record.currency] = per_currency.get(record.currency, 0.0) + record.cost
    return totals
