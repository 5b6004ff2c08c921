"""Console logging for binstream.

Everything logs under the ``binstream`` namespace to stderr, so stdout stays
free for the terminal chart. The level comes from ``--log-level``, else
``BINSTREAM_LOG_LEVEL``; ``BINSTREAM_DEBUG=1`` forces DEBUG.

    from binstream.util.logging import get_logger
    logger = get_logger(__name__)
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from typing import Optional

ROOT_LOGGER = "binstream"
_configured = False


class ConsoleFormatter(logging.Formatter):
    """``[HH:MM:SS] LEVEL [module] message``, level colored on a TTY."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, color: Optional[bool] = None) -> None:
        super().__init__()
        self.color = sys.stderr.isatty() if color is None else color

    def format(self, record: logging.LogRecord) -> str:
        level = f"{record.levelname:8}"
        if self.color:
            level = f"{self.LEVEL_COLORS.get(record.levelname, '')}{level}{self.RESET}"
        name = record.name[len(ROOT_LOGGER) + 1:] if record.name.startswith(ROOT_LOGGER + ".") else record.name
        line = f"[{datetime.now():%H:%M:%S}] {level} [{name}] {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def _level_from_env() -> str:
    if os.environ.get("BINSTREAM_DEBUG", "").strip().lower() in ("1", "true", "yes"):
        return "DEBUG"
    return os.environ.get("BINSTREAM_LOG_LEVEL", "INFO")


def configure_logging(level: Optional[str] = None) -> None:
    """(Re)install the stderr handler on the ``binstream`` logger."""
    global _configured

    numeric = getattr(logging, (level or _level_from_env()).upper(), logging.INFO)
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(numeric)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ConsoleFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Logger under ``binstream``; configures defaults on first use."""
    if not _configured:
        configure_logging()
    if name == "__main__":
        name = f"{ROOT_LOGGER}.main"
    elif name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
