"""Logging configuration for the command-line wrapper."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

LOGGER_NAME = "lockguard"
LOG_FORMAT = "[%(asctime)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def default_log_path(now: datetime | None = None) -> Path:
    """Return ``scan_<YYYYmmdd_HHMMSS>.log`` in the working directory."""
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return Path(f"scan_{stamp}.log")


def setup_logging(verbose: bool = False, log_file: Path | None = None) -> logging.Logger:
    """Configure the package logger for one CLI run.

    Args:
        verbose: Log per-file trace lines (DEBUG) instead of INFO and above
        log_file: Optional file that receives the same records, appended

    Returns:
        The configured ``lockguard`` logger
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Remove handlers from a previous run in the same process
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = Console(
        stderr=True,
        theme=Theme(
            {
                "logging.level.info": "cyan",
                "logging.level.warning": "yellow",
                "logging.level.error": "red",
                "logging.level.debug": "dim",
            }
        ),
    )
    rich_handler = RichHandler(console=console, show_time=True, show_path=False, markup=False)
    rich_handler.setLevel(level)
    rich_handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    logger.addHandler(rich_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def close_logging() -> None:
    """Detach and close the handlers installed by setup_logging."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
