"""Pytest configuration for test isolation.

The store reads ``CASHFLOW_DATA_FILE`` (when set) to pick its default ledger
path, which otherwise lands in the current working directory. An autouse
fixture points it at each test's own temporary directory so tests never
share on-disk state.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Make the workspace `packages/` dir importable when the project isn't installed.
_PKG_DIR = Path(__file__).resolve().parents[1] / "packages"
if str(_PKG_DIR) not in sys.path:
    sys.path.insert(0, str(_PKG_DIR))


@pytest.fixture(autouse=True)
def _isolate_data_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    data_file = tmp_path / "ledger.dat"
    monkeypatch.setenv("CASHFLOW_DATA_FILE", os.fspath(data_file))
    monkeypatch.delenv("CASHFLOW_LOG_LEVEL", raising=False)
    return data_file


@pytest.fixture
def data_file(_isolate_data_file: Path) -> Path:
    return _isolate_data_file


@pytest.fixture
def store(data_file: Path):
    from cashflow_ledger import LedgerStore

    return LedgerStore(data_file)
