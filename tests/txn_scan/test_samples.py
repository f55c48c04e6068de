from __future__ import annotations

from datetime import datetime, timezone

from txn_cli.txn_scan.samples import is_sample, make_fallback, sample_transactions
from txn_cli.txn_scan.types import Transaction, TransactionMetadata


def test_sample_transactions_are_tagged() -> None:
    now = datetime(2025, 3, 3, tzinfo=timezone.utc)
    transactions = sample_transactions("Chase", now=now)

    assert len(transactions) == 10
    assert all(txn.metadata.input_source == "Chase (Sample)" for txn in transactions)
    assert all(txn.metadata.input_time == now for txn in transactions)
    assert all(is_sample(txn) for txn in transactions)

    wire = transactions[6]
    assert wire.money_in == "$14,985.00"
    assert wire.money_out is None


def test_make_fallback_produces_fresh_lists() -> None:
    fallback = make_fallback("Generic")
    first = fallback()
    second = fallback()
    assert first is not second
    assert [txn.description for txn in first] == [txn.description for txn in second]


def test_real_transactions_are_not_samples() -> None:
    txn = Transaction(
        date="Jan 1",
        description="Coffee",
        money_out="$4.50",
        money_in=None,
        balance="",
        metadata=TransactionMetadata(input_source="Generic", input_time=datetime.now(timezone.utc)),
    )
    assert not is_sample(txn)
