"""Built-in demo ledger used when a page has no recognizable table."""

from __future__ import annotations

from datetime import datetime, timezone

from .scanner import Fallback
from .types import Transaction, TransactionMetadata

SAMPLE_MARKER = " (Sample)"

# (date, description, money out, money in, balance)
_SAMPLE_ROWS: tuple[tuple[str, str, str | None, str | None, str], ...] = (
    ("Mar 03, 2025", "INTERAC ETRNSFR SENT LULU 202506015341KAYPVG", "$90.00", None, "$7,754.03"),
    ("Feb 21, 2025", "BRANCH BILL PAYMENT BRANCH 0389 FLYWIRE", "$6,139.00", None, "$7,844.03"),
    ("Feb 20, 2025", "GOODLIFE CLUBS MSP/DIV", "$45.19", None, "$13,983.03"),
    ("Feb 18, 2025", "TF 3933#3607-829", "$808.00", None, "$14,028.22"),
    ("Feb 18, 2025", "TF 3933#3607-829", "$160.00", None, "$14,836.22"),
    ("Feb 18, 2025", "HANDLING CHG 768332", "$16.00", None, "$14,996.22"),
    ("Feb 18, 2025", "INCOMING WIRE PAYMENT TW, KAO SHENG WEN", None, "$14,985.00", "$15,012.22"),
    ("Feb 18, 2025", "RECURRING PYMNT 17FEB2025APPLE.COM/BILL ON", "$1.12", None, "$27.22"),
    ("Feb 18, 2025", "TF 000519123022775845", "$189.11", None, "$28.34"),
    ("Feb 18, 2025", "TF 3933#3607-829", None, "$100.00", "$217.45"),
)


def sample_source(source: str) -> str:
    return f"{source}{SAMPLE_MARKER}"


def sample_transactions(source: str, *, now: datetime | None = None) -> list[Transaction]:
    """Return the demo ledger tagged as sample data from ``source``."""

    metadata = TransactionMetadata(
        input_source=sample_source(source),
        input_time=now or datetime.now(timezone.utc),
    )
    return [
        Transaction(
            date=date_value,
            description=description,
            money_out=money_out,
            money_in=money_in,
            balance=balance,
            metadata=metadata,
        )
        for date_value, description, money_out, money_in, balance in _SAMPLE_ROWS
    ]


def make_fallback(source: str) -> Fallback:
    """Return a zero-argument producer of sample data for ``source``."""

    def _fallback() -> list[Transaction]:
        return sample_transactions(source)

    return _fallback


def no_fallback() -> list[Transaction]:
    return []


def is_sample(transaction: Transaction) -> bool:
    return transaction.metadata.input_source.endswith(SAMPLE_MARKER)
