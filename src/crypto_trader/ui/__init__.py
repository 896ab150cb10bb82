"""UI package for CryptoTrader: main window and dialogs."""

__all__ = ["CryptoTraderApp"]


def __getattr__(name: str):
    """Lazy-load CryptoTraderApp so ui.utils/dialogs can be used without building a window."""
    if name == "CryptoTraderApp":
        from crypto_trader.ui.main_window import CryptoTraderApp
        return CryptoTraderApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
