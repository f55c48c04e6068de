"""Convert one table row into a normalized transaction."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone

from .types import ColumnMap, ColumnRole, Transaction, TransactionMetadata
from .utils.amounts import interpret

MIN_NON_EMPTY_CELLS = 3


def extract_row(
    cells: Sequence[str | None],
    column_map: ColumnMap,
    source_label: str,
    *,
    input_time: datetime | None = None,
) -> Transaction | None:
    """Build a transaction from ``cells`` or return ``None`` to reject the row.

    Only rows with fewer than three non-empty cells are rejected. Malformed
    amounts degrade to absent fields and never abort the row.
    """

    values = [(cell or "").strip() for cell in cells]
    if sum(1 for value in values if value) < MIN_NON_EMPTY_CELLS:
        return None

    date_value = _cell(values, column_map.get(ColumnRole.DATE, 0))
    description = _cell(values, column_map.get(ColumnRole.DESCRIPTION, 1))
    money_out, money_in = _resolve_amounts(values, column_map)

    return Transaction(
        date=date_value,
        description=description,
        money_out=money_out,
        money_in=money_in,
        balance=_resolve_balance(values, column_map),
        metadata=TransactionMetadata(
            input_source=source_label,
            input_time=input_time or datetime.now(timezone.utc),
        ),
    )


def _resolve_amounts(
    values: Sequence[str],
    column_map: ColumnMap,
) -> tuple[str | None, str | None]:
    out_index = column_map.get(ColumnRole.MONEY_OUT)
    in_index = column_map.get(ColumnRole.MONEY_IN)

    # Separate columns: the column, not the sign, decides direction.
    if out_index is not None and in_index is not None:
        return _optional_cell(values, out_index), _optional_cell(values, in_index)

    amount_index = column_map.get(ColumnRole.SINGLE_AMOUNT)
    if amount_index is not None:
        reading = interpret(_cell(values, amount_index))
        if reading is None:
            return None, None
        if reading.is_negative:
            return reading.display, None
        return None, reading.display

    return _optional_cell(values, out_index), _optional_cell(values, in_index)


def _resolve_balance(values: Sequence[str], column_map: ColumnMap) -> str:
    balance_index = column_map.get(ColumnRole.BALANCE)
    if balance_index is not None:
        return _cell(values, balance_index)
    return values[-1] if values else ""


def _cell(values: Sequence[str], index: int | None) -> str:
    if index is None or index < 0 or index >= len(values):
        return ""
    return values[index]


def _optional_cell(values: Sequence[str], index: int | None) -> str | None:
    return _cell(values, index) or None
