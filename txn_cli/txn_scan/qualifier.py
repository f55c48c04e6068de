"""Decide whether a table looks like a transaction ledger."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .columns import classify_headers
from .types import AMOUNT_ROLES, ColumnRole


def roles_qualify(roles: Iterable[ColumnRole]) -> bool:
    """Return True when the roles include a date, a description and an amount.

    The amount may be any of money-out, money-in or a single signed amount.
    A balance column is optional.
    """

    present = set(roles)
    return (
        ColumnRole.DATE in present
        and ColumnRole.DESCRIPTION in present
        and not present.isdisjoint(AMOUNT_ROLES)
    )


def qualifies(header_labels: Sequence[str | None]) -> bool:
    return roles_qualify(classify_headers(header_labels))
