import json
from pathlib import Path

import pytest

from cashflow_ledger import LedgerStore, SnapshotError
from cashflow_ledger.snapshot import export_snapshot, import_snapshot


def test_export_writes_string_id_and_two_decimal_cost(store: LedgerStore, tmp_path: Path):
    store.add_data("2024-01-01,10:00", "Alice", "Bob", "Widget", 19.5, "USD", "Sales")
    out = tmp_path / "snap.json"

    assert export_snapshot(store, out) == 1
    doc = json.loads(out.read_text(encoding="utf-8"))
    assert doc == {
        "transactions": [
            {
                "id": "1",
                "datetime": "2024-01-01,10:00",
                "seller": "Alice",
                "buyer": "Bob",
                "merchandise": "Widget",
                "cost": "19.50",
                "currency": "USD",
                "category": "Sales",
            }
        ]
    }
    assert not out.with_suffix(".json.tmp").exists()


def test_import_replaces_contents_and_renumbers(store: LedgerStore, tmp_path: Path):
    src = LedgerStore(tmp_path / "other.dat")
    src.add_data("2024-02-01", "A", "B", "M1", 1.25, "USD", "Sales")
    src.add_data("2024-02-02", "C", "D", "M2", 2.0, "EUR", "Expenses")
    src.delete_data(1)
    snap = tmp_path / "snap.json"
    export_snapshot(src, snap)

    store.add_data("old", "x", "x", "x", 9.0, "USD", "Old")
    assert import_snapshot(store, snap) == 1

    (rec,) = store.get_all_data_entries()
    assert rec.id == 1
    assert (rec.merchandise, rec.cost, rec.currency) == ("M2", 2.0, "EUR")
    assert store.categories() == ["Expenses"]
    assert store.counter == 2


def test_invalid_snapshot_leaves_store_untouched(store: LedgerStore, tmp_path: Path):
    store.add_data("t", "s", "b", "m", 1.0, "USD", "C")
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"transactions": [{"id": "1", "cost": "abc"}]}), encoding="utf-8")

    with pytest.raises(SnapshotError):
        import_snapshot(store, bad)
    assert len(store) == 1


def test_import_missing_file_raises(store: LedgerStore, tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        import_snapshot(store, tmp_path / "absent.json")
