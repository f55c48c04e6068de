"""Currency cell interpretation."""

from __future__ import annotations

import re

from ..types import AmountReading

_MINUS_SIGNS = "-−–"

_AMOUNT_RE = re.compile(
    rf"""
    ^(?P<open>\()?\s*
    (?P<lead_sign>[{_MINUS_SIGNS}])?\s*
    (?P<symbol>(?:[A-Z]{{1,3}})?[$€£¥₹])?\s*
    (?P<inner_sign>[{_MINUS_SIGNS}])?\s*
    (?P<digits>\d{{1,3}}(?:,\d{{3}})+|\d+)
    (?P<fraction>\.\d{{2}})?\s*
    (?P<close>\))?$
    """,
    re.VERBOSE,
)


def interpret(cell_text: str | None) -> AmountReading | None:
    """Interpret a currency cell, returning ``None`` for anything else.

    Accepts values such as ``$1,234.56``, ``-$4.50``, ``$-4.50``, ``(45.19)``
    and ``CA$10``. Parenthesized and minus-signed values are negative. The
    ``display`` text drops the sign and parentheses but keeps the symbol.
    """

    cleaned = (cell_text or "").strip()
    if not cleaned:
        return None
    match = _AMOUNT_RE.match(cleaned)
    if not match:
        return None

    parenthesized = match.group("open") is not None
    if parenthesized != (match.group("close") is not None):
        return None
    if match.group("lead_sign") and match.group("inner_sign"):
        return None

    symbol = match.group("symbol") or ""
    digits = match.group("digits")
    fraction = match.group("fraction") or ""
    value = float(digits.replace(",", "") + fraction)
    negative = parenthesized or bool(match.group("lead_sign") or match.group("inner_sign"))
    return AmountReading(value=value, is_negative=negative, display=f"{symbol}{digits}{fraction}")


def parse_amount(value: str | None) -> float:
    """Parse a currency string into a signed float.

    Raises ``ValueError`` when the text is not a currency amount.
    """

    reading = interpret(value)
    if reading is None:
        raise ValueError(f"Not a currency amount: '{value}'")
    return -reading.value if reading.is_negative else reading.value
