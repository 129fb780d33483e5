"""
Logging setup for the check_updates command.

Diagnostics go to stderr so stdout carries only the outdated-pin lines and
can be piped. An optional log file receives everything at DEBUG.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

LOGGER_NAME = "upstream_pins"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    verbose: bool = False,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file receiving every record
        verbose: Force DEBUG on the console (UPSTREAM_PINS_DEBUG=1)

    Returns:
        The ``upstream_pins`` logger
    """
    console_level = logging.DEBUG if verbose else getattr(logging, level.upper())

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file else console_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(PinCheckFormatter(use_colors=sys.stderr.isatty()))
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(threadName)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        logger.addHandler(file_handler)

    # Keep records off the root logger's handlers
    logger.propagate = False
    return logger


class PinCheckFormatter(logging.Formatter):
    """
    Console formatter for check_updates.

    INFO lines are printed bare; other levels get a ``check_updates: <level>:``
    prefix, colored on a terminal. DEBUG lines also name the module and the
    fetch thread (``upstream-<item>``) that produced them.
    """

    PROG = "check_updates"

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[1;31m', # Bold Red
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__("%(message)s")
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno == logging.INFO:
            return message

        label = record.levelname.lower()
        if self.use_colors:
            label = f"{self.COLORS.get(record.levelname, '')}{label}{self.RESET}"

        if record.levelno == logging.DEBUG:
            module = record.name.rsplit(".", 1)[-1]
            return f"{self.PROG}: {label}: [{module}/{record.threadName}] {message}"
        return f"{self.PROG}: {label}: {message}"
