#!/usr/bin/env python3
"""
Currency Parsing and Formatting Utilities

All monetary values are handled as decimal.Decimal so sums and averages are
exact. Floats never enter a calculation.

Key Principles:
- Parse only plain decimal literals ("60.5", "10", ".25"); no exponents,
  separators, or special values like NaN/Infinity
- Round only for display, never for storage or aggregation
- Display rounding is half away from zero to two places
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

_DECIMAL_LITERAL = re.compile(r"(?:\d+(?:\.\d*)?|\.\d+)")

TWO_PLACES = Decimal("0.01")


def parse_decimal_amount(text: str) -> Decimal:
    """
    Parse an unsigned decimal literal into a Decimal.

    Args:
        text: String like "60.5", "10" or ".25"

    Returns:
        Exact Decimal value

    Raises:
        ValueError: If text is not a plain non-negative decimal literal

    Examples:
        parse_decimal_amount("60.5") -> Decimal("60.5")
        parse_decimal_amount("-5") -> ValueError
    """
    if not _DECIMAL_LITERAL.fullmatch(text):
        raise ValueError(f"not a decimal amount: {text!r}")
    try:
        return Decimal(text)
    except InvalidOperation as e:
        raise ValueError(f"not a decimal amount: {text!r}") from e


def format_fixed(amount: Decimal, places: int = 2) -> str:
    """
    Format a Decimal with a fixed number of fractional digits.

    Example:
        format_fixed(Decimal("28.583333")) -> "28.58"
        format_fixed(Decimal("-0.005")) -> "-0.01"
    """
    quantum = Decimal(1).scaleb(-places)
    return str(amount.quantize(quantum, rounding=ROUND_HALF_UP))


def format_dollars(amount: Decimal, show_plus: bool = False) -> str:
    """
    Format a Decimal as a dollar string with the sign in front of the symbol.

    Examples:
        format_dollars(Decimal("54.99")) -> "$54.99"
        format_dollars(Decimal("-40")) -> "-$40.00"
        format_dollars(Decimal("5"), show_plus=True) -> "+$5.00"
    """
    fixed = format_fixed(abs(amount))
    if amount < 0 and Decimal(fixed) != 0:
        return f"-${fixed}"
    if show_plus:
        return f"+${fixed}"
    return f"${fixed}"
