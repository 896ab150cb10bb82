"""Modal notifications for CryptoTrader: trade results and about box."""

from __future__ import annotations

from tkinter import messagebox
from typing import Optional

from crypto_trader.models.core import Instrument, TradeConfirmation, TradeSide
from crypto_trader.models.errors import TradeError
from crypto_trader.services.formatting import format_money, format_quantity


def confirmation_message(confirmation: TradeConfirmation, instrument: Optional[Instrument] = None) -> str:
    """Text for the success dialog, e.g. 'Successfully bought 0.10 Bitcoin (BTC) for $4,256.83'."""
    verb = "bought" if confirmation.side is TradeSide.BUY else "sold"
    label = instrument.display_name if instrument is not None else confirmation.symbol
    return (
        f"Successfully {verb} {format_quantity(confirmation.quantity)} {label} "
        f"for ${format_money(confirmation.total)}"
    )


def show_trade_confirmation(
    app, confirmation: TradeConfirmation, instrument: Optional[Instrument] = None
) -> None:
    """Blocking info dialog after a successful trade."""
    messagebox.showinfo("Trade Executed", confirmation_message(confirmation, instrument), parent=app)


def show_trade_error(app, error: TradeError) -> None:
    """Blocking error dialog for a rejected trade; title depends on the error kind."""
    messagebox.showerror(error.title, str(error), parent=app)


def show_about(app) -> None:
    """Show about dialog."""
    messagebox.showinfo(
        "About",
        "CryptoTrader\n\nA simple cryptocurrency trading simulator.\n"
        "Prices are fixed sample data; nothing is saved between runs.",
        parent=app,
    )
