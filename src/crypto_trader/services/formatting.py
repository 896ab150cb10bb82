"""Number formatting for labels, tables, and dialog messages."""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal
from typing import Union

Number = Union[Decimal, int, float, str]

_CENTS = Decimal("0.01")


def _to_cents(value: Number) -> Decimal:
    return Decimal(str(value)).quantize(_CENTS, rounding=ROUND_HALF_EVEN)


def format_money(value: Number) -> str:
    """Format as '#,##0.00' (no currency sign), e.g. 42568.3 -> '42,568.30'."""
    return f"{_to_cents(value):,.2f}"


def format_change(value: Number) -> str:
    """Format with an explicit sign, e.g. 2.5 -> '+2.50', -1.2 -> '-1.20'.

    The sign follows the unrounded value, so -0.001 -> '-0.00' and 0 -> '+0.00'.
    """
    raw = Decimal(str(value))
    sign = "-" if raw < 0 else "+"
    return f"{sign}{abs(_to_cents(raw)):,.2f}"


def format_quantity(value: Number) -> str:
    """Quantities use the same two-decimal format as the original tables."""
    return format_money(value)
