"""Monetary amounts as decimal strings.

Prices and totals are stored as strings with two decimal places ("149.99")
and only ever converted to ``Decimal`` for arithmetic, never to float.
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")

_AMOUNT_PATTERN = re.compile(r"^\d+(\.\d{1,2})?$")


def is_amount(value) -> bool:
    """True when ``value`` is a non-negative decimal string with at most two places."""
    return isinstance(value, str) and bool(_AMOUNT_PATTERN.match(value))


def to_decimal(value) -> Decimal:
    """Convert a stored amount (or a number) into a ``Decimal``."""
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Invalid amount: {value!r}") from exc


def quantize(value) -> Decimal:
    """Round to cents, half-up."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_amount(value) -> str:
    """Render an amount as a two-place decimal string."""
    return f"{quantize(value):.2f}"


def to_minor_units(value) -> int:
    """Amount in cents, for payment gateways."""
    return int((to_decimal(value) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
