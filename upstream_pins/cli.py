"""
Command-line entry point.

Usage:
    check_updates            # Print pinned items with a newer upstream version
    check_updates --update   # Also record them in the changelog and pin file
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from .common import is_debug_enabled
from .config import load_settings
from .errors import PinCheckError, UsageError
from .logging_config import setup_logging
from .orchestrator import run
from .registry import get_registry

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


class ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message: str):
        raise UsageError(f"{self.format_usage().strip()}\n{self.prog}: error: {message}")


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="check_updates",
        description="Check pinned build dependencies against their upstream releases",
    )
    parser.add_argument(
        "--update",
        action="store_true",
        help="Record newer versions in the changelog and rewrite the pin file",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for pin checks."""
    try:
        args = build_parser().parse_args(argv)
    except UsageError as e:
        print(e, file=sys.stderr)
        return EXIT_USAGE

    logger = setup_logging(verbose=is_debug_enabled())

    try:
        settings = load_settings()
        logger = setup_logging(
            level=settings.log_level,
            log_file=settings.log_file,
            verbose=is_debug_enabled(),
        )
        registry = get_registry(settings.sources)
        report = run(
            settings.pin_file,
            registry,
            update=args.update,
            changelog=settings.changelog,
            identity=settings.identity,
            insert_line=settings.changelog_insert_line,
        )
    except PinCheckError as e:
        logger.error(str(e))
        return EXIT_FAILURE
    except OSError as e:
        logger.error(f"File error: {e}")
        return EXIT_FAILURE

    logger.debug(f"{len(report.updates)} of {len(report.checked)} pinned items have updates")
    return EXIT_OK
