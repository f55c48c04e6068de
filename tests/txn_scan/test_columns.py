from __future__ import annotations

import pytest

from txn_cli.txn_scan.columns import build_column_map, classify, classify_headers
from txn_cli.txn_scan.types import ColumnRole


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("Date", ColumnRole.DATE),
        ("  Posting DATE ", ColumnRole.DATE),
        ("Transaction Date", ColumnRole.DATE),
        ("Description", ColumnRole.DESCRIPTION),
        ("Transaction Details", ColumnRole.DESCRIPTION),
        ("Account Activity", ColumnRole.DESCRIPTION),
        ("Money Out", ColumnRole.MONEY_OUT),
        ("Withdrawals ($)", ColumnRole.MONEY_OUT),
        ("Debit", ColumnRole.MONEY_OUT),
        ("Money   In", ColumnRole.MONEY_IN),
        ("Deposits", ColumnRole.MONEY_IN),
        ("Credit", ColumnRole.MONEY_IN),
        ("Amount", ColumnRole.SINGLE_AMOUNT),
        ("Balance", ColumnRole.BALANCE),
        ("Running balance", ColumnRole.BALANCE),
        ("Name", ColumnRole.UNKNOWN),
        ("", ColumnRole.UNKNOWN),
    ],
)
def test_classify_labels(label: str, expected: ColumnRole) -> None:
    assert classify(label) is expected


def test_classify_priority_prefers_earlier_rules() -> None:
    # "Transaction amount" contains both a description keyword and "amount".
    assert classify("Transaction amount") is ColumnRole.DESCRIPTION
    assert classify("Debit amount") is ColumnRole.MONEY_OUT
    assert classify("Credit balance") is ColumnRole.MONEY_IN
    assert classify("Amount balance") is ColumnRole.SINGLE_AMOUNT


def test_classify_headers_keeps_order() -> None:
    roles = classify_headers(["Date", "Memo", "Amount"])
    assert roles == (ColumnRole.DATE, ColumnRole.UNKNOWN, ColumnRole.SINGLE_AMOUNT)


def test_build_column_map_first_occurrence_wins() -> None:
    mapping = build_column_map(
        ["Date", "Posted Date", "Description", "Notes", "Amount", "Balance"]
    )
    assert mapping == {
        ColumnRole.DATE: 0,
        ColumnRole.DESCRIPTION: 2,
        ColumnRole.SINGLE_AMOUNT: 4,
        ColumnRole.BALANCE: 5,
    }
    assert ColumnRole.UNKNOWN not in mapping
