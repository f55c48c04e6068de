from __future__ import annotations

import pytest

from txn_cli.txn_scan.qualifier import qualifies, roles_qualify
from txn_cli.txn_scan.types import ColumnRole


@pytest.mark.parametrize(
    "headers",
    [
        ["Date", "Description", "Amount"],
        ["Date", "Description", "Debit"],
        ["Date", "Description", "Credit"],
        ["Posting Date", "Details", "Withdrawals", "Deposits", "Balance"],
        ["Amount", "Transaction", "Date"],
    ],
)
def test_ledger_headers_qualify(headers: list[str]) -> None:
    assert qualifies(headers)


@pytest.mark.parametrize(
    "headers",
    [
        ["Description", "Amount", "Balance"],
        ["Date", "Amount", "Balance"],
        ["Date", "Description", "Balance"],
        ["Name", "Value"],
        [],
    ],
)
def test_headers_missing_a_signal_do_not_qualify(headers: list[str]) -> None:
    assert not qualifies(headers)


def test_balance_is_not_required() -> None:
    assert roles_qualify([ColumnRole.DATE, ColumnRole.DESCRIPTION, ColumnRole.MONEY_IN])
