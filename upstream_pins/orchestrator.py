"""
Fan-out/fan-in driver for a full pin check.

All checkers are constructed up front so every fetch runs concurrently; the
results are then forced one by one in pin file order. A slow item early in
the file delays reporting of later items even if those already finished.
Any failure aborts the run before files are touched.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Mapping, TextIO

from .changelog import DEFAULT_INSERT_LINE, lookup_identity, prepend_entry, render_entry
from .checker import Fetcher, VersionChecker
from .collectors import http_get
from .pinfile import read_pins, write_pins
from .registry import FetchConfig
from .version import Version

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PinUpdate:
    """A tracked item whose upstream version differs from its pin."""
    name: str
    current: Version
    latest: Version

    def report_line(self) -> str:
        return f"{self.name} {self.latest} (current: {self.current})"


@dataclass(frozen=True)
class CheckReport:
    """
    Outcome of a pin check.

    Attributes:
        checked: Names of all tracked items, in pin file order
        updates: Items with a newer (or different) upstream version
        files_written: Whether the changelog and pin file were rewritten
    """
    checked: tuple[str, ...]
    updates: tuple[PinUpdate, ...]
    files_written: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.updates)


def start_checkers(
    pin_file: str | Path,
    registry: Mapping[str, FetchConfig],
    fetch: Fetcher = http_get,
) -> list[VersionChecker]:
    """Parse the pin file and start one checker per tracked item."""
    items = read_pins(pin_file)
    logger.debug(f"Checking {len(items)} pinned items from {pin_file}")
    return [
        VersionChecker(item.name, item.current_version, registry, fetch=fetch)
        for item in items
    ]


def collect_updates(
    checkers: list[VersionChecker],
    out: TextIO | None = None,
) -> list[PinUpdate]:
    """
    Force each checker in order and report the ones that changed.

    Args:
        checkers: Running checkers, in pin file order
        out: Stream for report lines (defaults to stdout)

    Returns:
        Changed items in pin file order
    """
    out = out or sys.stdout
    updates = []
    for checker in checkers:
        if checker.changed():
            update = PinUpdate(checker.name, checker.current_version, checker.latest_version())
            print(update.report_line(), file=out)
            updates.append(update)
        else:
            logger.debug(f"{checker.name} is up to date at {checker.current_version}")
    return updates


def apply_updates(
    updates: list[PinUpdate],
    pin_file: str | Path,
    changelog: str | Path,
    identity: str,
    insert_line: int = DEFAULT_INSERT_LINE,
) -> None:
    """Record updates in the changelog and rewrite their pins."""
    entry = render_entry([(u.name, str(u.latest)) for u in updates], identity)
    prepend_entry(changelog, entry, insert_line)
    write_pins(pin_file, {u.name: u.latest for u in updates})
    logger.info(f"Pin file updated: {pin_file}")


def run(
    pin_file: str | Path,
    registry: Mapping[str, FetchConfig],
    update: bool = False,
    changelog: str | Path = "CHANGELOG.md",
    identity: str | None = None,
    insert_line: int = DEFAULT_INSERT_LINE,
    fetch: Fetcher = http_get,
    out: TextIO | None = None,
    identity_lookup: Callable[[str | None], str] = lookup_identity,
) -> CheckReport:
    """
    Check every pinned item against upstream and optionally apply updates.

    Args:
        pin_file: Build file with NAME_VER pins
        registry: Fetch configuration per item
        update: Rewrite changelog and pin file when something changed
        changelog: Changelog file receiving the entry
        identity: Handle credited in the entry (looked up if None)
        insert_line: Changelog line where the entry is inserted
        fetch: Function fetching a URL as text
        out: Stream for report lines (defaults to stdout)
        identity_lookup: Resolves the identity when update is requested

    Returns:
        CheckReport describing what changed

    Raises:
        PinCheckError: On the first failure met in pin file order
    """
    checkers = start_checkers(pin_file, registry, fetch=fetch)
    updates = collect_updates(checkers, out=out)
    report = CheckReport(checked=tuple(c.name for c in checkers), updates=tuple(updates))

    if not updates or not update:
        return report

    apply_updates(updates, pin_file, changelog, identity_lookup(identity), insert_line)
    return CheckReport(checked=report.checked, updates=report.updates, files_written=True)
