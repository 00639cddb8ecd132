"""Binary on-disk format for the ledger.

Layout (little-endian, no header, version tag or checksum)::

    counter        int32
    record_count   uint64
    record_count times:
        id         int32
        cost       float64
        6 times (timestamp, seller, buyer, merchandise, currency, category):
            length uint64   byte length of the UTF-8 encoding
            bytes  length bytes

Any change to field order or widths silently breaks existing files.

Decoding bound-checks every fixed-width read and every length prefix against
the bytes that remain; a violation aborts the whole decode with
:class:`~cashflow_ledger.errors.MalformedLedgerError`. Trailing bytes after
the last record are ignored.
"""

from __future__ import annotations

import enum
import os
import struct
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from .errors import MalformedLedgerError
from .logging_setup import get_logger
from .models import TEXT_FIELDS, TransactionRecord

_COUNTER = struct.Struct("<i")
_COUNT = struct.Struct("<Q")
_ID = struct.Struct("<i")
_COST = struct.Struct("<d")
_LEN = struct.Struct("<Q")

_logger = get_logger("cashflow_ledger.codec")


class LoadResult(enum.Enum):
    """Outcome of reading a ledger file into a store."""

    LOADED = "loaded"
    NOT_FOUND = "not_found"
    IO_ERROR = "io_error"
    MALFORMED = "malformed"

    @property
    def ok(self) -> bool:
        return self is LoadResult.LOADED


@dataclass(frozen=True, slots=True)
class DecodedLedger:
    counter: int
    records: tuple[TransactionRecord, ...]


# ----------------------------------------------------------------------------
# Encoding
# ----------------------------------------------------------------------------


def encode_ledger(counter: int, records: Sequence[TransactionRecord]) -> bytes:
    """Serialize ``counter`` and ``records`` into the on-disk layout."""

    parts: list[bytes] = [_COUNTER.pack(counter), _COUNT.pack(len(records))]
    for record in records:
        parts.append(_ID.pack(record.id))
        parts.append(_COST.pack(record.cost))
        for name in TEXT_FIELDS:
            raw = getattr(record, name).encode("utf-8")
            parts.append(_LEN.pack(len(raw)))
            parts.append(raw)
    return b"".join(parts)


# ----------------------------------------------------------------------------
# Decoding
# ----------------------------------------------------------------------------


class _Reader:
    """Cursor over a byte buffer that refuses to read past its end."""

    def __init__(self, data: bytes) -> None:
        self._view = memoryview(data)
        self.offset = 0

    @property
    def remaining(self) -> int:
        return len(self._view) - self.offset

    def unpack(self, fmt: struct.Struct, what: str) -> int | float:
        if fmt.size > self.remaining:
            raise MalformedLedgerError(
                f"truncated {what}: need {fmt.size} bytes, {self.remaining} left",
                offset=self.offset,
            )
        (value,) = fmt.unpack_from(self._view, self.offset)
        self.offset += fmt.size
        return value

    def text(self, what: str) -> str:
        start = self.offset
        length = int(self.unpack(_LEN, f"{what} length"))
        if length > self.remaining:
            raise MalformedLedgerError(
                f"{what} length {length} exceeds remaining {self.remaining} bytes",
                offset=start,
            )
        raw = bytes(self._view[self.offset : self.offset + length])
        try:
            value = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedLedgerError(f"{what} is not valid UTF-8: {e}", offset=self.offset) from e
        self.offset += length
        return value


def decode_ledger(data: bytes) -> DecodedLedger:
    """Parse a full ledger buffer.

    Raises :class:`MalformedLedgerError` on truncation, oversized length
    prefixes, invalid UTF-8, duplicate ids, or a counter that would reissue a
    live id.
    """

    reader = _Reader(data)
    counter = int(reader.unpack(_COUNTER, "counter"))
    count = int(reader.unpack(_COUNT, "record count"))

    records: list[TransactionRecord] = []
    seen: set[int] = set()
    for _ in range(count):
        start = reader.offset
        record_id = int(reader.unpack(_ID, "record id"))
        cost = float(reader.unpack(_COST, "cost"))
        fields = {name: reader.text(name) for name in TEXT_FIELDS}
        if record_id in seen:
            raise MalformedLedgerError(f"duplicate transaction id {record_id}", offset=start)
        seen.add(record_id)
        records.append(TransactionRecord(id=record_id, cost=cost, **fields))

    if counter < 1 or (seen and counter <= max(seen)):
        raise MalformedLedgerError(
            f"id counter {counter} does not exceed stored ids", offset=0
        )
    return DecodedLedger(counter=counter, records=tuple(records))


# ----------------------------------------------------------------------------
# File I/O
# ----------------------------------------------------------------------------


def write_ledger_file(
    path: str | os.PathLike[str], counter: int, records: Iterable[TransactionRecord]
) -> bool:
    """Overwrite ``path`` with the encoded ledger.

    Returns ``False`` when the ledger cannot be encoded (a counter or id
    outside int32, text that is not encodable as UTF-8) or the destination
    cannot be opened or written. An interrupted write leaves a truncated file
    behind.
    """

    try:
        payload = encode_ledger(counter, list(records))
    except (UnicodeEncodeError, struct.error):
        _logger.error("ledger:encode_failed path=%s", os.fspath(path), exc_info=True)
        return False
    try:
        with open(path, "wb") as f:
            f.write(payload)
    except OSError:
        _logger.error("ledger:save_failed path=%s", os.fspath(path), exc_info=True)
        return False
    _logger.info("ledger:saved path=%s bytes=%d", os.fspath(path), len(payload))
    return True


def read_ledger_file(path: str | os.PathLike[str]) -> tuple[LoadResult, DecodedLedger | None]:
    """Read and decode ``path`` without touching any store.

    A missing file is :attr:`LoadResult.NOT_FOUND`; any other ``OSError``
    (permissions, a directory in place of the file) is
    :attr:`LoadResult.IO_ERROR`.
    """

    p = Path(path)
    try:
        data = p.read_bytes()
    except FileNotFoundError:
        _logger.debug("ledger:not_found path=%s", os.fspath(p))
        return LoadResult.NOT_FOUND, None
    except OSError:
        _logger.error("ledger:read_failed path=%s", os.fspath(p), exc_info=True)
        return LoadResult.IO_ERROR, None
    try:
        decoded = decode_ledger(data)
    except MalformedLedgerError as e:
        _logger.warning("ledger:malformed path=%s error=%s", os.fspath(p), e)
        return LoadResult.MALFORMED, None
    return LoadResult.LOADED, decoded


__all__ = [
    "DecodedLedger",
    "LoadResult",
    "decode_ledger",
    "encode_ledger",
    "read_ledger_file",
    "write_ledger_file",
]
