"""Shared utilities for table scanning."""

from __future__ import annotations

from .amounts import interpret, parse_amount
from .table import merge_rows, normalize_cells, normalize_table_rows

__all__ = [
    "interpret",
    "merge_rows",
    "normalize_cells",
    "normalize_table_rows",
    "parse_amount",
]
