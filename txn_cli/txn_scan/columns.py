"""Header label classification."""

from __future__ import annotations

from collections.abc import Iterable

from .types import ColumnMap, ColumnRole

# Evaluated in order; the first rule with a matching keyword wins.
_ROLE_RULES: tuple[tuple[ColumnRole, tuple[str, ...]], ...] = (
    (ColumnRole.DATE, ("date",)),
    (ColumnRole.DESCRIPTION, ("description", "details", "transaction", "activity")),
    (ColumnRole.MONEY_OUT, ("money out", "debit", "withdrawal")),
    (ColumnRole.MONEY_IN, ("money in", "credit", "deposit")),
    (ColumnRole.SINGLE_AMOUNT, ("amount",)),
    (ColumnRole.BALANCE, ("balance",)),
)


def normalize_label(label: str | None) -> str:
    """Lower-case a header label and collapse its whitespace."""

    return " ".join((label or "").lower().split())


def classify(header_label: str | None) -> ColumnRole:
    """Map a single header label to its column role.

    Matching is substring based, so "Transaction Date" is a date column and
    "Withdrawals ($)" is a money-out column. Unrecognized labels are
    ``ColumnRole.UNKNOWN``.
    """

    normalized = normalize_label(header_label)
    if not normalized:
        return ColumnRole.UNKNOWN
    for role, keywords in _ROLE_RULES:
        if any(keyword in normalized for keyword in keywords):
            return role
    return ColumnRole.UNKNOWN


def classify_headers(headers: Iterable[str | None]) -> tuple[ColumnRole, ...]:
    return tuple(classify(header) for header in headers)


def build_column_map(headers: Iterable[str | None]) -> ColumnMap:
    """Return the first column index for each recognized role."""

    mapping: ColumnMap = {}
    for index, role in enumerate(classify_headers(headers)):
        if role is ColumnRole.UNKNOWN or role in mapping:
            continue
        mapping[role] = index
    return mapping
