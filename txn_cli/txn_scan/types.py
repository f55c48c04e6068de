"""Dataclasses describing scanned tables and extracted transactions."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class ColumnRole(str, Enum):
    """Semantic meaning inferred for a table column."""

    DATE = "date"
    DESCRIPTION = "description"
    MONEY_OUT = "money_out"
    MONEY_IN = "money_in"
    SINGLE_AMOUNT = "single_amount"
    BALANCE = "balance"
    UNKNOWN = "unknown"


AMOUNT_ROLES = frozenset({ColumnRole.MONEY_OUT, ColumnRole.MONEY_IN, ColumnRole.SINGLE_AMOUNT})

# Role -> 0-based column index. UNKNOWN is never a key.
ColumnMap = dict[ColumnRole, int]


@dataclass(slots=True)
class RawTable:
    """Header labels and body cell texts read from one page table."""

    headers: tuple[str, ...]
    rows: list[tuple[str, ...]] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class AmountReading:
    """A currency cell interpreted as a magnitude plus direction."""

    value: float
    is_negative: bool
    display: str


@dataclass(frozen=True, slots=True)
class TransactionMetadata:
    """Where and when a transaction was produced."""

    input_source: str
    input_time: datetime


@dataclass(frozen=True, slots=True)
class Transaction:
    """Normalized ledger row. Dates and amounts are kept as displayed."""

    date: str
    description: str
    money_out: str | None
    money_in: str | None
    balance: str
    metadata: TransactionMetadata

    def to_payload(self) -> dict[str, Any]:
        """Return the camelCase wire shape, omitting absent amounts."""

        payload: dict[str, Any] = {
            "date": self.date,
            "description": self.description,
        }
        if self.money_out is not None:
            payload["moneyOut"] = self.money_out
        if self.money_in is not None:
            payload["moneyIn"] = self.money_in
        payload["balance"] = self.balance
        payload["metadata"] = {
            "inputSource": self.metadata.input_source,
            "inputTime": self.metadata.input_time.isoformat(),
        }
        return payload


@dataclass(frozen=True, slots=True)
class ScanSummary:
    """Counters describing a single scan pass."""

    tables_seen: int = 0
    tables_qualified: int = 0
    rows_extracted: int = 0
    rows_rejected: int = 0
    used_fallback: bool = False


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Transactions returned by a scan together with its summary."""

    transactions: Sequence[Transaction]
    summary: ScanSummary

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self.transactions)

    def __len__(self) -> int:  # pragma: no cover - trivial
        return len(self.transactions)
