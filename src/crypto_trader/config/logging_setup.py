"""Standard-library logging setup shared by the desktop app and scripts."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from crypto_trader.config.constants import LOG_FORMAT, LOG_LEVEL


def configure_logging(level: Optional[str] = None) -> None:
    """Configure the root logger with a single stream handler.

    Args:
        level: Level name (DEBUG, INFO, ...). Defaults to CRYPTO_TRADER_LOG_LEVEL.

    Raises:
        ValueError: If the level name is not a known logging level.
    """
    name = (level or LOG_LEVEL).upper()
    log_level = logging.getLevelName(name)
    if not isinstance(log_level, int):
        raise ValueError(f"Invalid log level: {name}")
    logging.basicConfig(level=log_level, stream=sys.stderr, format=LOG_FORMAT, force=True)
