import logging

from cashflow_ledger.config import load_settings
from cashflow_ledger.logging_setup import get_logger, resolve_level


def test_resolve_level_names():
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(" WARNING ") == logging.WARNING
    assert resolve_level(None) == logging.INFO
    assert resolve_level("chatty") == logging.INFO


def test_level_comes_from_settings(monkeypatch):
    monkeypatch.setenv("CASHFLOW_LOG_LEVEL", "error")
    assert resolve_level(load_settings().log_level) == logging.ERROR


def test_get_logger_is_namespaced_under_package():
    logger = get_logger("cashflow_ledger.codec")
    assert logger.name == "cashflow_ledger.codec"
    assert logging.getLogger("cashflow_ledger").handlers
