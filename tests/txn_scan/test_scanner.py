from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone

from txn_cli.txn_scan.samples import sample_transactions
from txn_cli.txn_scan.scanner import scan, scan_with_summary
from txn_cli.txn_scan.types import RawTable, Transaction


def _fail_fallback() -> list[Transaction]:
    raise AssertionError("fallback should not be called")


def _ledger() -> RawTable:
    return RawTable(
        headers=("Date", "Description", "Money Out", "Money In", "Balance"),
        rows=[("Feb 18, 2025", "Handling Chg", "$16.00", "", "$14,996.22")],
    )


def test_scan_end_to_end_skips_non_ledger_tables() -> None:
    tables = [
        RawTable(headers=("Name", "Value"), rows=[("Account", "Checking")]),
        _ledger(),
    ]
    transactions = scan(tables, "Generic", _fail_fallback)

    assert len(transactions) == 1
    txn = transactions[0]
    assert txn.date == "Feb 18, 2025"
    assert txn.description == "Handling Chg"
    assert txn.money_out == "$16.00"
    assert txn.money_in is None
    assert txn.balance == "$14,996.22"


def test_scan_returns_fallback_output_unmodified() -> None:
    fallback_output = sample_transactions("Generic")
    tables = [RawTable(headers=("Name", "Value"), rows=[("a", "b")])]

    result = scan(tables, "Generic", lambda: fallback_output)

    assert result is fallback_output


def test_scan_uses_fallback_when_qualifying_table_has_no_valid_rows() -> None:
    table = RawTable(
        headers=("Date", "Description", "Amount"),
        rows=[("Total", "", "")],
    )
    result = scan_with_summary([table], "Generic", lambda: [])
    assert list(result.transactions) == []
    assert result.summary.used_fallback is True
    assert result.summary.tables_qualified == 1
    assert result.summary.rows_rejected == 1


def test_scan_excludes_short_rows_but_keeps_siblings() -> None:
    table = RawTable(
        headers=("Date", "Description", "Amount", "Balance"),
        rows=[
            ("Jan 1, 2025", "Coffee Shop", "-$4.50", "$95.50"),
            ("Jan 1, 2025", "", "", "$95.50"),
            ("Jan 2, 2025", "Refund", "$10.00", "$105.50"),
        ],
    )
    transactions = scan([table], "Generic", _fail_fallback)
    assert [txn.description for txn in transactions] == ["Coffee Shop", "Refund"]


def test_scan_drops_rows_with_mismatched_width() -> None:
    table = RawTable(
        headers=("Date", "Description", "Amount"),
        rows=[
            ("Jan 1", "Coffee", "-$4.50"),
            ("Jan 1", "Continued memo line", "extra", "cells"),
        ],
    )
    result = scan_with_summary([table], "Generic", _fail_fallback)
    assert len(result.transactions) == 1
    assert result.summary.rows_rejected == 1


def test_scan_preserves_table_and_row_order() -> None:
    first = RawTable(
        headers=("Date", "Description", "Amount"),
        rows=[("Jan 1", "A", "$1.00"), ("Jan 2", "B", "$2.00")],
    )
    second = RawTable(
        headers=("Date", "Details", "Debit", "Credit"),
        rows=[("Jan 3", "C", "$3.00", "")],
    )
    transactions = scan([first, second], "Wells Fargo", _fail_fallback)
    assert [txn.description for txn in transactions] == ["A", "B", "C"]
    assert {txn.metadata.input_source for txn in transactions} == {"Wells Fargo"}


def test_scan_is_idempotent_apart_from_input_time() -> None:
    tables = [_ledger()]
    start = datetime(2025, 1, 1, tzinfo=timezone.utc)
    ticks = iter([start, start + timedelta(seconds=5)])

    first = scan(tables, "Generic", _fail_fallback, clock=lambda: next(ticks))
    second = scan(tables, "Generic", _fail_fallback, clock=lambda: next(ticks))

    assert first[0].metadata.input_time != second[0].metadata.input_time
    normalized_second = [
        replace(txn, metadata=replace(txn.metadata, input_time=first[0].metadata.input_time))
        for txn in second
    ]
    assert list(first) == normalized_second


def test_scan_summary_counts() -> None:
    tables = [RawTable(headers=("Name", "Value"), rows=[]), _ledger()]
    result = scan_with_summary(tables, "Generic", _fail_fallback)
    assert result.summary.tables_seen == 2
    assert result.summary.tables_qualified == 1
    assert result.summary.rows_extracted == 1
    assert result.summary.used_fallback is False
