from datetime import date

import pytest

from cashflow_ledger import TransactionRecord
from cashflow_ledger.report import filter_records, parse_entry_date, totals_by_category


def _rec(rid: int, ts: str, category: str, cost: float = 1.0, currency: str = "USD"):
    return TransactionRecord(rid, ts, "s", "b", "m", cost, currency, category)


RECORDS = [
    _rec(1, "2024-01-01,10:00", "Sales", 10.0),
    _rec(2, "2024-01-15,12:00", "sales ", 5.0),
    _rec(3, "2024-02-01,08:00", "Expenses", 3.0),
    _rec(4, "yesterday", "Sales", 100.0),
    _rec(5, "2024-01-20", "Sales", 2.0, "EUR"),
]


def test_parse_entry_date():
    assert parse_entry_date("2024-01-01,10:00") == date(2024, 1, 1)
    assert parse_entry_date("2024-01-01") == date(2024, 1, 1)
    assert parse_entry_date("01/02/2024") is None


def test_filter_by_range_skips_unparseable_dates():
    got = filter_records(RECORDS, start=date(2024, 1, 1), end=date(2024, 1, 31))
    assert [r.id for r in got] == [1, 2, 5]


def test_filter_category_is_case_insensitive_and_untrimmed():
    got = filter_records(
        RECORDS, start=date(2024, 1, 1), end=date(2024, 12, 31), category=" SALES "
    )
    # Record 2 is stored as "sales " and only the filter is trimmed.
    assert [r.id for r in got] == [1, 5]


def test_inverted_range_raises():
    with pytest.raises(ValueError):
        filter_records(RECORDS, start=date(2024, 2, 1), end=date(2024, 1, 1))


def test_totals_by_category_split_by_currency():
    totals = totals_by_category([RECORDS[0], RECORDS[4], RECORDS[2], RECORDS[3]])
    assert totals == {"Sales": {"USD": 110.0, "EUR": 2.0}, "Expenses": {"USD": 3.0}}
