"""Trade rejection errors.

Each error carries a message ready to show to the user. All of them are
raised before the portfolio is touched, so catching one means no state
changed.
"""

from __future__ import annotations


class TradeError(ValueError):
    """Base class for a rejected trade."""

    title = "Trade Error"


class InvalidInput(TradeError):
    """Quantity is not a positive finite number."""

    title = "Input Error"


class InsufficientFunds(TradeError):
    """Buy cost exceeds the cash balance."""


class InsufficientHoldings(TradeError):
    """Sell quantity exceeds the amount held."""


class UnknownInstrument(TradeError):
    """Symbol is not in the market table."""
