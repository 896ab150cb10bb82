"""
CryptoTrader desktop launcher.

A simple cryptocurrency trading simulator with a market list, portfolio
view, and trade form. Run from the repository root without installing.
"""

import sys
from pathlib import Path

_src = Path(__file__).resolve().parent / "src"
if _src.is_dir() and str(_src) not in sys.path:
    sys.path.insert(0, str(_src))

from crypto_trader.app import main  # noqa: E402

if __name__ == "__main__":
    main()
