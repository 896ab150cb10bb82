"""Shared UI utilities: colors for values, treeview helpers."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional, Sequence, Union

from crypto_trader.theming.style import COLOR_LOSS, COLOR_NEUTRAL, COLOR_PROFIT


def color_for_value(value: Optional[Union[Decimal, float, int, str]]) -> str:
    """
    Return foreground color for a numeric value (P&L, 24h change, etc.).
    Use only on the value widget, never on descriptors or whole rows.

    Returns:
        COLOR_PROFIT if value > 0, COLOR_LOSS if value < 0,
        COLOR_NEUTRAL if value is None, not numeric, or rounds to zero cents.
    """
    if value is None:
        return COLOR_NEUTRAL
    try:
        v = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return COLOR_NEUTRAL
    if not v.is_finite() or abs(v) < Decimal("0.005"):
        return COLOR_NEUTRAL
    return COLOR_PROFIT if v > 0 else COLOR_LOSS


def color_tag(value: Optional[Union[Decimal, float, int, str]]) -> str:
    """Treeview tag name for a row colored by value: 'profit', 'loss', or 'neutral'."""
    color = color_for_value(value)
    if color == COLOR_PROFIT:
        return "profit"
    if color == COLOR_LOSS:
        return "loss"
    return "neutral"


def configure_color_tags(tree) -> None:
    """Register the profit/loss/neutral tags on a ttk.Treeview."""
    tree.tag_configure("profit", foreground=COLOR_PROFIT)
    tree.tag_configure("loss", foreground=COLOR_LOSS)
    tree.tag_configure("neutral", foreground="")


def replace_rows(tree, rows: Sequence[tuple], tags: Optional[Sequence[str]] = None) -> list:
    """Clear a Treeview and insert rows; returns the new item ids in order."""
    for item in tree.get_children():
        tree.delete(item)
    iids = []
    for i, values in enumerate(rows):
        row_tags = (tags[i],) if tags else ()
        iids.append(tree.insert("", "end", values=values, tags=row_tags))
    return iids
