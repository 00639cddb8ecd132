"""Environment-driven settings for ``cashflow_ledger``.

Recognized variables:

- ``CASHFLOW_DATA_FILE``: path of the binary ledger file. Defaults to
  ``cashflow_data.dat`` under the current working directory.
- ``CASHFLOW_LOG_LEVEL``: level name or number for :mod:`.logging_setup`.

Entrypoints load ``.env`` (``python-dotenv``) before calling
:func:`load_settings`; this module never reads ``.env`` itself.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_DATA_FILE = "cashflow_data.dat"


@dataclass(frozen=True, slots=True)
class Settings:
    data_file: Path
    log_level: str | None = None


def _resolve_data_file(raw: str | None) -> Path:
    if raw and raw.strip():
        return Path(raw.strip()).expanduser()
    return Path.cwd() / DEFAULT_DATA_FILE


def load_settings(*, data_file: str | os.PathLike[str] | None = None) -> Settings:
    """Build :class:`Settings` from the environment.

    An explicit ``data_file`` wins over ``CASHFLOW_DATA_FILE``.
    """

    if data_file is not None:
        path = Path(data_file).expanduser()
    else:
        path = _resolve_data_file(os.getenv("CASHFLOW_DATA_FILE"))
    level = (os.getenv("CASHFLOW_LOG_LEVEL") or "").strip() or None
    return Settings(data_file=path, log_level=level)
