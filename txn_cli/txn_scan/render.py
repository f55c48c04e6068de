"""Output rendering helpers for txn-scan."""

from __future__ import annotations

import csv
import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from io import StringIO
from pathlib import Path
from typing import IO

import click
from rich import box
from rich.console import Console
from rich.table import Table

from .samples import is_sample
from .types import Transaction
from .utils.amounts import interpret

CSV_HEADER = ["Date", "Description", "Money Out", "Money In", "Balance"]


@dataclass(frozen=True, slots=True)
class Totals:
    money_out: float
    money_in: float
    count: int

    @property
    def net(self) -> float:
        return self.money_in - self.money_out


def default_export_name(today: date | None = None) -> str:
    return f"transaction_history_{(today or date.today()).isoformat()}.csv"


def render_csv_rows(transactions: Iterable[Transaction]) -> list[list[str]]:
    return [
        [
            txn.date,
            txn.description,
            txn.money_out or "",
            txn.money_in or "",
            txn.balance,
        ]
        for txn in transactions
    ]


def render_csv(transactions: Iterable[Transaction]) -> str:
    """Return CSV text; fields containing commas or quotes are quoted."""

    buffer = StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    writer.writerows(render_csv_rows(transactions))
    return buffer.getvalue()


def write_csv(transactions: Iterable[Transaction], output_path: str | Path | None) -> None:
    """Write CSV to ``output_path``, or to stdout when no path is given."""

    if output_path is None:
        click.echo(render_csv(transactions).rstrip("\n"))
        return
    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with output_file.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(CSV_HEADER)
        writer.writerows(render_csv_rows(transactions))


def render_json(transactions: Sequence[Transaction], *, success: bool = True) -> str:
    payload = {
        "success": success,
        "transactions": [txn.to_payload() for txn in transactions],
    }
    return json.dumps(payload, indent=2)


def summarize_totals(transactions: Iterable[Transaction]) -> Totals:
    """Sum money out and money in, skipping values that are not currency."""

    money_out = 0.0
    money_in = 0.0
    count = 0
    for txn in transactions:
        count += 1
        out_reading = interpret(txn.money_out)
        if out_reading is not None:
            money_out += out_reading.value
        in_reading = interpret(txn.money_in)
        if in_reading is not None:
            money_in += in_reading.value
    return Totals(money_out=round(money_out, 2), money_in=round(money_in, 2), count=count)


def render_table(
    transactions: Sequence[Transaction],
    *,
    stream: IO[str] | None = None,
    title: str | None = None,
) -> None:
    """Print transactions as a Rich table."""

    console = Console(file=stream, highlight=False, force_terminal=False)
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold", title=title)
    table.add_column("Date", no_wrap=True)
    table.add_column("Description")
    table.add_column("Money Out", justify="right")
    table.add_column("Money In", justify="right")
    table.add_column("Balance", justify="right")
    for row in render_csv_rows(transactions):
        table.add_row(*row)
    console.print(table)

    totals = summarize_totals(transactions)
    note = " (sample data)" if transactions and all(is_sample(txn) for txn in transactions) else ""
    console.print(
        f"{totals.count} transactions{note} | money out {totals.money_out:,.2f} | "
        f"money in {totals.money_in:,.2f}",
        markup=False,
    )
