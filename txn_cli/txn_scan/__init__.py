"""Discover transaction ledgers in HTML tables and normalize their rows."""

from __future__ import annotations

from .columns import build_column_map, classify, classify_headers
from .qualifier import qualifies, roles_qualify
from .rows import extract_row
from .scanner import scan, scan_with_summary
from .types import (
    AmountReading,
    ColumnMap,
    ColumnRole,
    RawTable,
    ScanResult,
    ScanSummary,
    Transaction,
    TransactionMetadata,
)
from .utils.amounts import interpret

__all__ = [
    "AmountReading",
    "ColumnMap",
    "ColumnRole",
    "RawTable",
    "ScanResult",
    "ScanSummary",
    "Transaction",
    "TransactionMetadata",
    "build_column_map",
    "classify",
    "classify_headers",
    "extract_row",
    "interpret",
    "qualifies",
    "roles_qualify",
    "scan",
    "scan_with_summary",
]
