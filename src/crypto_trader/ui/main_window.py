"""Main application window for CryptoTrader.

Header with balance, a notebook with Market / Portfolio / Trade tabs, an
activity log, and a footer. All state lives in the TradeDesk; the window
only reads it and submits trades.
"""

from __future__ import annotations

import logging
import random
import tkinter as tk
from datetime import datetime
from tkinter import EW, W, ttk
from typing import Dict, Optional

import ttkbootstrap as tb
from ttkbootstrap.constants import PRIMARY, SUCCESS

from crypto_trader.config.constants import (
    APP_NAME,
    APP_TITLE,
    FOOTER_LEFT,
    FOOTER_RIGHT,
    THEME_NAME,
    WINDOW_GEOMETRY,
    WINDOW_MIN_SIZE,
)
from crypto_trader.models.core import Instrument, TradeConfirmation, TradeSide
from crypto_trader.models.errors import TradeError
from crypto_trader.services import metrics
from crypto_trader.services.formatting import format_change, format_money, format_quantity
from crypto_trader.services.ledger import INVALID_PREVIEW, Portfolio, TradeDesk
from crypto_trader.services.market import MarketDataStore, market_cap, market_info
from crypto_trader.theming.style import (
    APP_FONT_DEFAULT,
    BALANCE_FONT,
    CAPTION_FONT,
    COLOR_NEUTRAL,
    PADDING,
    PLACEHOLDER_FONT,
    SPACING_LARGE,
    SPACING_MEDIUM,
    SPACING_SMALL,
    STAT_VALUE_FONT,
    TITLE_FONT,
    VALUE_FONT,
    setup_styles,
)
from crypto_trader.ui import dialogs
from crypto_trader.ui.utils import color_for_value, color_tag, configure_color_tags, replace_rows

logger = logging.getLogger(__name__)

MARKET_COLUMNS = ("Cryptocurrency", "Price (USD)", "24h Change", "Market Cap")
PORTFOLIO_COLUMNS = ("Cryptocurrency", "Holdings", "Value (USD)", "Avg. Buy Price", "Profit/Loss")


class CryptoTraderApp(tb.Window):
    """Main application window for simulated crypto trading."""

    def __init__(self, desk: Optional[TradeDesk] = None, rng: Optional[random.Random] = None):
        """Initialize the application.

        Args:
            desk: Session to trade against; a freshly seeded one by default.
            rng: Source for cosmetic figures (market cap, avg buy price).
        """
        super().__init__(themename=THEME_NAME)
        self.title(APP_TITLE)
        self.geometry(WINDOW_GEOMETRY)
        self.minsize(*WINDOW_MIN_SIZE)

        self.desk = desk if desk is not None else TradeDesk(Portfolio.seeded(), MarketDataStore())
        self.rng = rng if rng is not None else random.Random()
        self.selected_symbol = self.desk.market.symbols()[0]
        self._market_row_symbol: Dict[str, str] = {}

        setup_styles(self)
        self.create_menu_bar()
        self.create_widgets()

        self._unsubscribe = self.desk.subscribe(self._on_trade_executed)
        self.protocol("WM_DELETE_WINDOW", self._quit)

        self.refresh_market_table()
        self.refresh_portfolio()
        self.update_price_and_total()
        self.log_activity("Session started with balance $" + format_money(self.desk.portfolio.cash_balance))

    def create_menu_bar(self):
        """Create the menu bar."""
        menubar = tk.Menu(self)
        self.config(menu=menubar)

        file_menu = tk.Menu(menubar, tearoff=0)
        menubar.add_cascade(label="File", menu=file_menu)
        file_menu.add_command(label="Quit", command=self._quit)

        view_menu = tk.Menu(menubar, tearoff=0)
        menubar.add_cascade(label="View", menu=view_menu)
        view_menu.add_command(label="Market", command=lambda: self.tab_control.select(self.tab_market))
        view_menu.add_command(label="Portfolio", command=lambda: self.tab_control.select(self.tab_portfolio))
        view_menu.add_command(label="Trade", command=lambda: self.tab_control.select(self.tab_trade))
        view_menu.add_separator()
        view_menu.add_command(label="Refresh", command=self.refresh_all)

        help_menu = tk.Menu(menubar, tearoff=0)
        menubar.add_cascade(label="Help", menu=help_menu)
        help_menu.add_command(label="About", command=lambda: dialogs.show_about(self))

    def create_widgets(self):
        """Create header, tabs, activity log, and footer."""
        self.create_header()
        # Bottom bars are packed before the notebook so it cannot squeeze them out
        self.create_footer()
        self.create_activity_log()

        self.tab_control = ttk.Notebook(self)
        self.tab_market = tb.Frame(self.tab_control)
        self.tab_portfolio = tb.Frame(self.tab_control)
        self.tab_trade = tb.Frame(self.tab_control)
        self.tab_control.add(self.tab_market, text="Market")
        self.tab_control.add(self.tab_portfolio, text="Portfolio")
        self.tab_control.add(self.tab_trade, text="Trade")
        self.tab_control.pack(expand=1, fill="both", padx=PADDING, pady=(PADDING, 0))

        self.create_market_tab()
        self.create_portfolio_tab()
        self.create_trade_tab()

    # --- Header / footer ---

    def create_header(self):
        header = tb.Frame(self, style="Header.TFrame", padding=(SPACING_LARGE, 10))
        header.pack(fill="x")
        tb.Label(header, text=APP_NAME, font=TITLE_FONT, style="Header.TLabel").pack(side="left")
        self.balance_label = tb.Label(header, text="", font=BALANCE_FONT, style="Header.TLabel")
        self.balance_label.pack(side="right")

    def create_footer(self):
        footer = tb.Frame(self, style="Header.TFrame", padding=(SPACING_LARGE, SPACING_MEDIUM))
        footer.pack(side="bottom", fill="x")
        tb.Label(footer, text=FOOTER_LEFT, style="Header.TLabel").pack(side="left")
        tb.Label(footer, text=FOOTER_RIGHT, style="Header.TLabel").pack(side="right")

    def create_activity_log(self):
        log_frame = tb.LabelFrame(self, text="Activity")
        log_frame.pack(side="bottom", fill="x", padx=PADDING, pady=PADDING)
        self.log_text = tk.Text(log_frame, height=4, font=CAPTION_FONT, state="disabled", wrap="word")
        log_vsb = ttk.Scrollbar(log_frame, orient="vertical", command=self.log_text.yview)
        self.log_text.configure(yscrollcommand=log_vsb.set)
        self.log_text.pack(side="left", fill="both", expand=True, padx=SPACING_SMALL, pady=SPACING_SMALL)
        log_vsb.pack(side="right", fill="y")

    # --- Market tab ---

    def create_market_tab(self):
        """Search bar, instrument table, and Trade button."""
        container = tb.Frame(self.tab_market, padding=PADDING)
        container.pack(fill="both", expand=True)

        search_row = tb.Frame(container)
        search_row.pack(fill="x", pady=(0, SPACING_MEDIUM))
        tk.Label(search_row, text="Search:", font=APP_FONT_DEFAULT).pack(side="left", padx=(0, SPACING_MEDIUM))
        self.search_var = tb.StringVar()
        search_entry = tb.Entry(search_row, textvariable=self.search_var, font=APP_FONT_DEFAULT)
        search_entry.pack(side="left", fill="x", expand=True)
        search_entry.bind("<Return>", lambda e: self.refresh_market_table())
        tb.Button(search_row, text="Search", bootstyle=PRIMARY, command=self.refresh_market_table).pack(
            side="left", padx=(SPACING_MEDIUM, 0)
        )

        table_frame = tb.Frame(container)
        table_frame.pack(fill="both", expand=True)
        self.market_tree = ttk.Treeview(table_frame, columns=MARKET_COLUMNS, show="headings", height=8)
        for col in MARKET_COLUMNS:
            self.market_tree.heading(col, text=col)
            self.market_tree.column(col, width=150, anchor=tk.CENTER)
        self.market_tree.column("Cryptocurrency", anchor=W, width=190)
        configure_color_tags(self.market_tree)
        market_vsb = ttk.Scrollbar(table_frame, orient="vertical", command=self.market_tree.yview)
        self.market_tree.configure(yscrollcommand=market_vsb.set)
        self.market_tree.pack(side="left", fill="both", expand=True)
        market_vsb.pack(side="right", fill="y")
        self.market_tree.bind("<Double-1>", lambda e: self.trade_selected_market_row())

        tb.Button(container, text="Trade", bootstyle=PRIMARY, command=self.trade_selected_market_row).pack(
            anchor="e", pady=(SPACING_MEDIUM, 0)
        )

    def refresh_market_table(self):
        """Repopulate the market table from the search query; market caps are re-rolled."""
        instruments = self.desk.market.find(self.search_var.get())
        rows = [
            (
                inst.display_name,
                "$" + format_money(inst.price),
                format_change(inst.change_24h) + "%",
                "$" + format_money(market_cap(inst, self.rng)),
            )
            for inst in instruments
        ]
        tags = [color_tag(inst.change_24h) for inst in instruments]
        iids = replace_rows(self.market_tree, rows, tags)
        self._market_row_symbol = {iid: inst.symbol for iid, inst in zip(iids, instruments)}

    def trade_selected_market_row(self):
        """Switch to the Trade tab with the highlighted market row selected."""
        selection = self.market_tree.selection()
        if not selection:
            return
        symbol = self._market_row_symbol.get(selection[0])
        if symbol is None:
            return
        self.select_instrument(symbol)
        self.tab_control.select(self.tab_trade)
        self.log_activity(f"Selected {symbol} for trading")

    # --- Portfolio tab ---

    def create_portfolio_tab(self):
        """Total value, summary stats, and holdings table."""
        container = tb.Frame(self.tab_portfolio, padding=PADDING)
        container.pack(fill="both", expand=True)

        self.portfolio_value_label = tk.Label(container, text="", font=VALUE_FONT)
        self.portfolio_value_label.pack(anchor=W, pady=(0, SPACING_MEDIUM))

        stats = tb.Frame(container)
        stats.pack(fill="x", pady=(0, SPACING_LARGE))
        self._stat_labels: Dict[str, tk.Label] = {}
        for i, title in enumerate(("Assets", "24h Change", "Profit/Loss")):
            cell = tb.LabelFrame(stats, text=title, padding=SPACING_MEDIUM)
            cell.grid(row=0, column=i, sticky=EW, padx=(0 if i == 0 else SPACING_MEDIUM, 0))
            stats.grid_columnconfigure(i, weight=1)
            lbl = tk.Label(cell, text="", font=STAT_VALUE_FONT)
            lbl.pack(anchor=W)
            self._stat_labels[title] = lbl

        table_frame = tb.Frame(container)
        table_frame.pack(fill="both", expand=True)
        self.portfolio_tree = ttk.Treeview(table_frame, columns=PORTFOLIO_COLUMNS, show="headings", height=6)
        for col in PORTFOLIO_COLUMNS:
            self.portfolio_tree.heading(col, text=col)
            self.portfolio_tree.column(col, width=130, anchor=tk.CENTER)
        self.portfolio_tree.column("Cryptocurrency", anchor=W, width=190)
        configure_color_tags(self.portfolio_tree)
        portfolio_vsb = ttk.Scrollbar(table_frame, orient="vertical", command=self.portfolio_tree.yview)
        self.portfolio_tree.configure(yscrollcommand=portfolio_vsb.set)
        self.portfolio_tree.pack(side="left", fill="both", expand=True)
        portfolio_vsb.pack(side="right", fill="y")

    def refresh_portfolio(self):
        """Recompute valuation and rows; called after every trade."""
        summary = metrics.portfolio_summary(self.desk.portfolio, self.desk.market, self.rng)
        self.portfolio_value_label.config(
            text=f"Total Portfolio Value: ${format_money(summary['total_value'])}"
        )
        self._stat_labels["Assets"].config(text=str(summary["asset_count"]))
        change = summary["change_24h_pct"]
        self._stat_labels["24h Change"].config(text=format_change(change) + "%", fg=color_for_value(change))
        pnl = summary["profit_loss"]
        self._stat_labels["Profit/Loss"].config(text="$" + format_change(pnl), fg=color_for_value(pnl))

        rows = metrics.portfolio_rows(self.desk.portfolio, self.desk.market, self.rng)
        values = [
            (
                row["display_name"],
                format_quantity(row["quantity"]),
                "$" + format_money(row["value"]),
                "$" + format_money(row["avg_buy_price"]),
                "$" + format_change(row["profit_loss"]),
            )
            for row in rows
        ]
        replace_rows(self.portfolio_tree, values, [color_tag(row["profit_loss"]) for row in rows])
        self.update_header()

    def update_header(self):
        self.balance_label.config(text=f"Balance: ${format_money(self.desk.portfolio.cash_balance)}")

    # --- Trade tab ---

    def create_trade_tab(self):
        """Trade form on the left; market info and chart placeholder on the right."""
        container = tb.Frame(self.tab_trade, padding=PADDING)
        container.pack(fill="both", expand=True)

        form = tb.Frame(container)
        form.pack(side="left", fill="y", padx=(0, SPACING_LARGE))

        tk.Label(form, text="Trade Type:", font=APP_FONT_DEFAULT).grid(row=0, column=0, sticky=W, pady=SPACING_MEDIUM)
        side_row = tb.Frame(form)
        side_row.grid(row=0, column=1, sticky=W, pady=SPACING_MEDIUM)
        self.side_var = tb.StringVar(value=TradeSide.BUY.value)
        for side in TradeSide:
            tb.Radiobutton(
                side_row, text=side.value, value=side.value, variable=self.side_var,
                command=self.update_price_and_total,
            ).pack(side="left", padx=(0, SPACING_MEDIUM))

        tk.Label(form, text="Select Cryptocurrency:", font=APP_FONT_DEFAULT).grid(
            row=1, column=0, sticky=W, pady=SPACING_MEDIUM
        )
        self.instrument_var = tb.StringVar()
        self.instrument_combo = ttk.Combobox(
            form,
            textvariable=self.instrument_var,
            values=[inst.display_name for inst in self.desk.market.instruments()],
            state="readonly",
            width=22,
        )
        self.instrument_combo.grid(row=1, column=1, sticky=EW, pady=SPACING_MEDIUM)
        self.instrument_combo.current(self.desk.market.index_of(self.selected_symbol))
        self.instrument_combo.bind("<<ComboboxSelected>>", self._on_instrument_selected)

        tk.Label(form, text="Current Price:", font=APP_FONT_DEFAULT).grid(row=2, column=0, sticky=W, pady=SPACING_MEDIUM)
        self.price_label = tk.Label(form, text="", font=VALUE_FONT)
        self.price_label.grid(row=2, column=1, sticky=W, pady=SPACING_MEDIUM)

        tk.Label(form, text="Amount:", font=APP_FONT_DEFAULT).grid(row=3, column=0, sticky=W, pady=SPACING_MEDIUM)
        self.amount_var = tb.StringVar(value="1.0")
        amount_entry = tb.Entry(form, textvariable=self.amount_var, font=APP_FONT_DEFAULT)
        amount_entry.grid(row=3, column=1, sticky=EW, pady=SPACING_MEDIUM)
        amount_entry.bind("<Return>", lambda e: self.execute_trade())
        self.amount_var.trace_add("write", lambda *a: self.update_price_and_total())

        self.total_caption = tk.Label(form, text="Total Cost:", font=APP_FONT_DEFAULT)
        self.total_caption.grid(row=4, column=0, sticky=W, pady=SPACING_MEDIUM)
        self.total_label = tk.Label(form, text="", font=VALUE_FONT)
        self.total_label.grid(row=4, column=1, sticky=W, pady=SPACING_MEDIUM)

        self.holding_label = tk.Label(form, text="", font=CAPTION_FONT, fg=COLOR_NEUTRAL)
        self.holding_label.grid(row=5, column=0, columnspan=2, sticky=W)

        tb.Button(form, text="Execute Trade", bootstyle=SUCCESS, command=self.execute_trade, width=20).grid(
            row=6, column=0, columnspan=2, pady=(SPACING_LARGE, 0)
        )

        right = tb.Frame(container)
        right.pack(side="left", fill="both", expand=True)

        info_frame = tb.LabelFrame(right, text="Market Information", padding=PADDING)
        info_frame.pack(fill="x")
        self._info_labels: Dict[str, tk.Label] = {}
        info_titles = ("24h High", "24h Low", "24h Volume", "Market Cap", "Circulating Supply", "All-Time High")
        for i, title in enumerate(info_titles):
            cell = tb.Frame(info_frame)
            cell.grid(row=i // 2, column=i % 2, sticky=EW, padx=SPACING_MEDIUM, pady=SPACING_MEDIUM)
            info_frame.grid_columnconfigure(i % 2, weight=1)
            tk.Label(cell, text=title, font=CAPTION_FONT, fg=COLOR_NEUTRAL).pack(anchor=W)
            lbl = tk.Label(cell, text="", font=APP_FONT_DEFAULT)
            lbl.pack(anchor=W)
            self._info_labels[title] = lbl

        chart_frame = tb.LabelFrame(right, text="Price Chart", padding=PADDING)
        chart_frame.pack(fill="both", expand=True, pady=(SPACING_LARGE, 0))
        tk.Label(chart_frame, text="Price chart would be displayed here", font=PLACEHOLDER_FONT, fg=COLOR_NEUTRAL).pack(
            expand=True
        )

    def _on_instrument_selected(self, event=None):
        index = self.instrument_combo.current()
        symbols = self.desk.market.symbols()
        if 0 <= index < len(symbols):
            self.selected_symbol = symbols[index]
        self.update_price_and_total()

    def select_instrument(self, symbol: str):
        """Select symbol in the Trade form (used by the Market tab's Trade action)."""
        index = self.desk.market.index_of(symbol)
        if index < 0:
            return
        self.selected_symbol = symbol
        self.instrument_combo.current(index)
        self.update_price_and_total()

    def current_instrument(self) -> Instrument:
        return self.desk.market.get(self.selected_symbol)

    def update_price_and_total(self):
        """Refresh price, running total, holding hint, and market info for the form."""
        instrument = self.current_instrument()
        self.price_label.config(text="$" + format_money(instrument.price))

        total = self.desk.preview_total(instrument.symbol, self.amount_var.get())
        if total is INVALID_PREVIEW:
            self.total_label.config(text="Invalid amount")
        else:
            self.total_label.config(text="$" + format_money(total))
        is_buy = self.side_var.get() == TradeSide.BUY.value
        self.total_caption.config(text="Total Cost:" if is_buy else "Total Proceeds:")

        held = self.desk.portfolio.holding(instrument.symbol)
        self.holding_label.config(
            text=f"Available: ${format_money(self.desk.portfolio.cash_balance)} cash, "
            f"{format_quantity(held)} {instrument.symbol} held"
        )
        self.update_market_info(instrument)

    def update_market_info(self, instrument: Instrument):
        info = market_info(instrument)
        not_available = "N/A"
        self._info_labels["24h High"].config(text="$" + format_money(info.day_high))
        self._info_labels["24h Low"].config(text="$" + format_money(info.day_low))
        self._info_labels["24h Volume"].config(text="$" + format_money(info.day_volume))
        self._info_labels["Market Cap"].config(
            text="$" + format_money(info.market_cap) if info.market_cap is not None else not_available
        )
        self._info_labels["Circulating Supply"].config(
            text=f"{format_money(info.circulating_supply)} {instrument.symbol}"
            if info.circulating_supply is not None
            else not_available
        )
        self._info_labels["All-Time High"].config(
            text="$" + format_money(info.all_time_high) if info.all_time_high is not None else not_available
        )

    def execute_trade(self):
        """Submit the form; show a blocking dialog for the result."""
        instrument = self.current_instrument()
        side = self.side_var.get()
        amount = self.amount_var.get()
        try:
            confirmation = self.desk.submit(instrument.symbol, amount, side)
        except TradeError as e:
            self.log_activity(f"Rejected {side} {amount.strip()} {instrument.symbol}: {e}")
            dialogs.show_trade_error(self, e)
            return
        dialogs.show_trade_confirmation(self, confirmation, instrument)
        self.tab_control.select(self.tab_portfolio)

    def _on_trade_executed(self, confirmation: TradeConfirmation):
        """TradeDesk listener: recompute every view that depends on the ledger."""
        verb = "Bought" if confirmation.side is TradeSide.BUY else "Sold"
        self.log_activity(
            f"{verb} {format_quantity(confirmation.quantity)} {confirmation.symbol} "
            f"@ ${format_money(confirmation.price)} for ${format_money(confirmation.total)}"
        )
        self.refresh_portfolio()
        self.update_price_and_total()

    # --- Misc ---

    def refresh_all(self):
        self.refresh_market_table()
        self.refresh_portfolio()
        self.update_price_and_total()

    def log_activity(self, msg: str):
        """Append a timestamped line to the activity log."""
        logger.debug("activity: %s", msg)
        self.log_text.config(state="normal")
        timestamp = datetime.now().strftime("%H:%M:%S")
        self.log_text.insert(tk.END, f"[{timestamp}] {msg}\n")
        self.log_text.see(tk.END)
        self.log_text.config(state="disabled")

    def _quit(self):
        self._unsubscribe()
        self.quit()


def main() -> None:
    """Create the window and run the Tk main loop."""
    app = CryptoTraderApp()
    app.mainloop()
