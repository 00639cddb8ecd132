"""Logging for ``cashflow_ledger``.

Library modules call ``get_logger("cashflow_ledger.<module>")`` and never
attach handlers. The CLI calls ``configure_logging(settings.log_level)`` once
at startup; until then the package logger only carries a ``NullHandler``.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

PACKAGE_LOGGER = "cashflow_ledger"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_configured = False


def resolve_level(name: str | None) -> int:
    """Map a level name from ``Settings.log_level`` to a ``logging`` level.

    ``None`` and unknown names resolve to ``INFO``.
    """

    if not name:
        return logging.INFO
    return logging.getLevelNamesMapping().get(name.strip().upper(), logging.INFO)


def configure_logging(level: str | None = None, *, stream: IO[str] = sys.stderr) -> None:
    """Send package records at ``level`` and above to ``stream`` (stderr).

    Only the first call has an effect.
    """

    global _configured
    if _configured:
        return

    logger = logging.getLogger(PACKAGE_LOGGER)
    for h in [h for h in logger.handlers if isinstance(h, logging.NullHandler)]:
        logger.removeHandler(h)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(resolve_level(level))
    logger.propagate = False

    _configured = True


def get_logger(name: str) -> logging.Logger:
    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    if not _configured and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
