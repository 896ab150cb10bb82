"""Centralized theming and typography for the CryptoTrader UI."""

from __future__ import annotations

import tkinter as tk
import ttkbootstrap as tb

APP_FONT_FAMILY = "Helvetica"
APP_FONT_DEFAULT = ("Helvetica", 12)  # Use tuple so Tk doesn't split family names with spaces
TITLE_FONT = ("Helvetica", 22, "bold")
BALANCE_FONT = ("Helvetica", 15, "bold")
VALUE_FONT = ("Helvetica", 14, "bold")
STAT_VALUE_FONT = ("Helvetica", 15, "bold")
CAPTION_FONT = ("Helvetica", 10)
PLACEHOLDER_FONT = ("Helvetica", 13, "italic")

COLOR_PROFIT = "#30D158"  # Green
COLOR_LOSS = "#FF3B30"    # Red
COLOR_NEUTRAL = "#888888"  # Gray for descriptor labels and zero values
COLOR_HEADER_BG = "#202B3D"
COLOR_HEADER_FG = "#FFFFFF"

SPACING_SMALL = 4
SPACING_MEDIUM = 8
SPACING_LARGE = 16
PADDING = 12

TABLE_ROW_HEIGHT = 30


def setup_styles(root: tk.Misc) -> tb.Style:
    """Configure ttk/ttkbootstrap styles shared by all tabs.

    ttkbootstrap.Style is a singleton and does not take master; root is kept
    for API compatibility with callers.
    """
    style = tb.Style()
    style.configure("Vertical.TScrollbar", gripcount=0, width=8, arrowsize=0)
    try:
        style.configure("TButton", padding=(14, 8))
        style.configure("Treeview", rowheight=TABLE_ROW_HEIGHT, font=(APP_FONT_FAMILY, 11))
        style.configure("Header.TFrame", background=COLOR_HEADER_BG)
        style.configure(
            "Header.TLabel", background=COLOR_HEADER_BG, foreground=COLOR_HEADER_FG
        )
    except tk.TclError:
        # Some environments may not support style reconfiguration; fail gracefully.
        pass
    return style
