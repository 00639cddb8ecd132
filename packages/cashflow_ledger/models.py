"""Data models for ``cashflow_ledger``.

``TransactionRecord`` is the in-memory record held by the store. It is a
frozen dataclass: there is no in-place edit API, so callers model a change
as delete followed by add.

The pydantic models at the bottom describe the JSON snapshot document written
by :mod:`cashflow_ledger.snapshot`.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Order in which the text fields are written by the binary codec.
TEXT_FIELDS: tuple[str, ...] = (
    "timestamp",
    "seller",
    "buyer",
    "merchandise",
    "currency",
    "category",
)


@dataclass(frozen=True, slots=True)
class TransactionRecord:
    """A single ledger transaction.

    Attributes
    ----------
    id:
        Identifier assigned by the store; unique among live records.
    timestamp:
        Free-text date/time label, conventionally ``"YYYY-MM-DD,HH:MM"``. Not
        validated.
    seller, buyer, merchandise:
        Free text.
    cost:
        Amount in ``currency`` units.
    currency:
        Free-text currency code (e.g., ``"USD"``).
    category:
        Free-text label; key of the category index.
    """

    id: int
    timestamp: str
    seller: str
    buyer: str
    merchandise: str
    cost: float
    currency: str
    category: str


def format_record(record: TransactionRecord) -> str:
    """Render a record as the one-line listing used by ``list``."""

    return (
        f"ID: {record.id}, Date/Time: {record.timestamp}, Buyer: {record.buyer}, "
        f"Seller: {record.seller}, Merchandise: {record.merchandise}, "
        f"Cost: {record.cost:g}, Currency: {record.currency}, Category: {record.category}"
    )


# ---------------------------------------------------------------------------
# DTOs for the JSON snapshot document
# ---------------------------------------------------------------------------


class SnapshotRecord(BaseModel):
    """One row of the snapshot. ``id`` and ``cost`` are stored as strings."""

    model_config = ConfigDict(strict=True, extra="forbid")

    id: str
    datetime: str
    seller: str
    buyer: str
    merchandise: str
    cost: str
    currency: str
    category: str

    @field_validator("cost")
    @classmethod
    def _cost_is_numeric(cls, v: str) -> str:
        try:
            float(v)
        except ValueError:
            raise ValueError(f"cost must be numeric, got {v!r}") from None
        return v

    @classmethod
    def from_record(cls, record: TransactionRecord) -> SnapshotRecord:
        return cls(
            id=str(record.id),
            datetime=record.timestamp,
            seller=record.seller,
            buyer=record.buyer,
            merchandise=record.merchandise,
            cost=f"{record.cost:.2f}",
            currency=record.currency,
            category=record.category,
        )


class LedgerSnapshot(BaseModel):
    """Top-level schema for a snapshot JSON file."""

    model_config = ConfigDict(strict=True, extra="forbid")

    transactions: list[SnapshotRecord] = Field(default_factory=list)
