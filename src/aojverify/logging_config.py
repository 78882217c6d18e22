"""Logging setup for the aojverify CLI."""
from __future__ import annotations

import logging
import sys
from datetime import datetime
from typing import Optional, TextIO

from colorama import Fore, Style

_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class StructuredFormatter(logging.Formatter):
    """``[TIME] LEVEL [logger] message key=value ...`` with optional colour."""

    COLORS = {
        "DEBUG": Fore.CYAN,
        "INFO": Fore.GREEN,
        "WARNING": Fore.YELLOW,
        "ERROR": Fore.RED,
        "CRITICAL": Fore.MAGENTA,
    }

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]
        level = record.levelname
        if self.use_colors:
            level = f"{self.COLORS.get(level, '')}{level:8}{Style.RESET_ALL}"
        else:
            level = f"{level:8}"
        parts = [f"[{timestamp}]", level, f"[{record.name}]", record.getMessage()]
        fields = {key: value for key, value in vars(record).items() if key not in _STANDARD_ATTRS}
        parts.extend(f"{key}={value}" for key, value in fields.items())
        if record.exc_info:
            parts.append(self.formatException(record.exc_info))
        return " ".join(parts)


def setup_logging(
    verbose: bool = False,
    *,
    use_colors: bool = True,
    stream: Optional[TextIO] = None,
) -> None:
    """Route ``aojverify`` log records to ``stream`` (stderr by default)."""

    stream = stream or sys.stderr
    root_logger = logging.getLogger("aojverify")
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    root_logger.handlers.clear()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter(use_colors=use_colors and stream.isatty()))
    root_logger.addHandler(handler)
    root_logger.propagate = False

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
