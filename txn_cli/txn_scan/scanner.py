"""Page-level orchestration: find ledger tables and collect their rows."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime, timezone

from .columns import build_column_map, classify_headers
from .qualifier import roles_qualify
from .rows import extract_row
from .types import RawTable, ScanResult, ScanSummary, Transaction

_log = logging.getLogger(__name__)

Fallback = Callable[[], Sequence[Transaction]]
Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def scan(
    tables: Iterable[RawTable],
    source_label: str,
    fallback: Fallback,
    *,
    clock: Clock = _utc_now,
) -> Sequence[Transaction]:
    """Extract transactions from every ledger-like table, in document order.

    When no table yields a transaction the result of ``fallback()`` is
    returned as-is. Finding nothing is never an error.
    """

    return scan_with_summary(tables, source_label, fallback, clock=clock).transactions


def scan_with_summary(
    tables: Iterable[RawTable],
    source_label: str,
    fallback: Fallback,
    *,
    clock: Clock = _utc_now,
) -> ScanResult:
    input_time = clock()
    transactions: list[Transaction] = []
    tables_seen = 0
    tables_qualified = 0
    rows_rejected = 0

    for table_index, table in enumerate(tables):
        tables_seen += 1
        roles = classify_headers(table.headers)
        if not roles_qualify(roles):
            _log.debug("Table %d is not a ledger (headers=%r)", table_index, table.headers)
            continue
        tables_qualified += 1
        column_map = build_column_map(table.headers)
        width = len(table.headers)

        for row_index, row in enumerate(table.rows):
            if len(row) != width:
                rows_rejected += 1
                _log.debug(
                    "Table %d row %d has %d cells, expected %d; skipped",
                    table_index,
                    row_index,
                    len(row),
                    width,
                )
                continue
            transaction = extract_row(row, column_map, source_label, input_time=input_time)
            if transaction is None:
                rows_rejected += 1
                _log.debug("Table %d row %d rejected: too few cells", table_index, row_index)
                continue
            transactions.append(transaction)

    if transactions:
        summary = ScanSummary(
            tables_seen=tables_seen,
            tables_qualified=tables_qualified,
            rows_extracted=len(transactions),
            rows_rejected=rows_rejected,
        )
        return ScanResult(transactions=transactions, summary=summary)

    _log.debug("No transactions found across %d tables; using fallback", tables_seen)
    summary = ScanSummary(
        tables_seen=tables_seen,
        tables_qualified=tables_qualified,
        rows_rejected=rows_rejected,
        used_fallback=True,
    )
    return ScanResult(transactions=fallback(), summary=summary)
