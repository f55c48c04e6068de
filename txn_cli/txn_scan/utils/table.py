"""Helpers for normalizing raw table rows."""

from __future__ import annotations

from itertools import zip_longest
from typing import Callable, Iterable, Sequence

from ..qualifier import qualifies
from ..types import RawTable

HeaderPredicate = Callable[[tuple[str, ...]], bool]


def normalize_table_rows(
    raw_rows: Iterable[Sequence[str | None]],
    *,
    header_scan: int = 6,
    header_predicate: HeaderPredicate | None = None,
    merge_depth: int = 3,
) -> RawTable:
    """Locate a header among the leading rows of an unlabeled table.

    Parameters
    ----------
    raw_rows:
        Every row of the table, header candidates included.
    header_scan:
        Number of leading rows to consider while searching for a header.
    header_predicate:
        Decides whether a candidate row is the header. Defaults to the
        ledger qualification test.
    merge_depth:
        Maximum number of successive rows merged into one candidate, for
        headers split across lines ("Money" / "Out").

    Returns a :class:`RawTable` whose rows follow the header. When no
    candidate matches, the headers are empty and every row is kept.
    """

    rows = [normalize_cells(row) for row in raw_rows]
    rows = [row for row in rows if any(row)]
    if not rows:
        return RawTable(headers=(), rows=[])

    predicate = header_predicate or qualifies
    max_scan = min(header_scan, len(rows))

    for idx in range(max_scan):
        candidate = rows[idx]
        variants = [(candidate, 1)]
        for depth in range(2, merge_depth + 1):
            if idx + depth - 1 >= len(rows):
                break
            merged = merge_rows(rows[idx : idx + depth])
            variants.append((merged, depth))
        for header, span in variants:
            if predicate(header):
                return RawTable(headers=header, rows=list(rows[idx + span :]))

    return RawTable(headers=(), rows=rows)


def merge_rows(rows: Sequence[Sequence[str]]) -> tuple[str, ...]:
    """Merge multiple rows column-wise, joining non-empty cells by space."""

    merged: list[str] = []
    for column_cells in zip_longest(*rows, fillvalue=""):
        merged_value = " ".join(part for part in column_cells if part).strip()
        merged.append(merged_value)
    return tuple(merged)


def normalize_cells(row: Sequence[str | None]) -> tuple[str, ...]:
    """Collapse whitespace and convert ``None`` values to empty strings."""

    return tuple(" ".join((cell or "").split()) for cell in row)
