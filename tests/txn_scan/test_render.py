from __future__ import annotations

import csv
import io
import json
from datetime import date, datetime, timezone
from pathlib import Path

import pytest

from txn_cli.txn_scan.render import (
    CSV_HEADER,
    default_export_name,
    render_csv,
    render_json,
    render_table,
    summarize_totals,
    write_csv,
)
from txn_cli.txn_scan.samples import sample_transactions
from txn_cli.txn_scan.types import Transaction, TransactionMetadata

_NOW = datetime(2025, 3, 3, 9, 30, tzinfo=timezone.utc)


def _txn(description: str, money_out: str | None, money_in: str | None) -> Transaction:
    return Transaction(
        date="Feb 18, 2025",
        description=description,
        money_out=money_out,
        money_in=money_in,
        balance="$15,012.22",
        metadata=TransactionMetadata(input_source="Generic", input_time=_NOW),
    )


def test_render_csv_quotes_fields_with_commas() -> None:
    text = render_csv([_txn('WIRE "TW", KAO SHENG WEN', None, "$14,985.00")])
    lines = text.splitlines()
    assert lines[0] == "Date,Description,Money Out,Money In,Balance"
    assert lines[1] == '"Feb 18, 2025","WIRE ""TW"", KAO SHENG WEN",,"$14,985.00","$15,012.22"'


def test_write_csv_to_file(tmp_path: Path) -> None:
    output = tmp_path / "nested" / "out.csv"
    write_csv(sample_transactions("Chase", now=_NOW), output)

    with output.open(newline="", encoding="utf-8") as handle:
        rows = list(csv.reader(handle))
    assert rows[0] == CSV_HEADER
    assert len(rows) == 11
    assert rows[1] == [
        "Mar 03, 2025",
        "INTERAC ETRNSFR SENT LULU 202506015341KAYPVG",
        "$90.00",
        "",
        "$7,754.03",
    ]


def test_render_json_envelope() -> None:
    payload = json.loads(render_json([_txn("Fee", "$16.00", None)]))
    assert payload["success"] is True
    (item,) = payload["transactions"]
    assert item == {
        "date": "Feb 18, 2025",
        "description": "Fee",
        "moneyOut": "$16.00",
        "balance": "$15,012.22",
        "metadata": {"inputSource": "Generic", "inputTime": "2025-03-03T09:30:00+00:00"},
    }


def test_summarize_totals_skips_unparseable_amounts() -> None:
    totals = summarize_totals(
        [
            _txn("Fee", "$16.00", None),
            _txn("Wire", None, "$1,000.00"),
            _txn("Odd", "pending", None),
        ]
    )
    assert totals.count == 3
    assert totals.money_out == pytest.approx(16.0)
    assert totals.money_in == pytest.approx(1000.0)
    assert totals.net == pytest.approx(984.0)


def test_render_table_marks_sample_data() -> None:
    stream = io.StringIO()
    render_table(sample_transactions("Chase", now=_NOW), stream=stream)
    output = stream.getvalue()
    assert "GOODLIFE" in output
    assert "10 transactions (sample data)" in output


def test_default_export_name() -> None:
    assert default_export_name(date(2025, 3, 3)) == "transaction_history_2025-03-03.csv"
