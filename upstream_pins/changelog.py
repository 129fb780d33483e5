"""
Changelog entry rendering and insertion.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Sequence

from .common import atomic_write_text
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# Line (0-based) where new entries go, right below the title
DEFAULT_INSERT_LINE = 2

PROFILE_URL = "https://github.com/{identity}"


def join_names(parts: Sequence[str]) -> str:
    """Join items as natural language: "a", "a and b", "a, b and c"."""
    if not parts:
        return ""
    if len(parts) == 1:
        return parts[0]
    return f"{', '.join(parts[:-1])} and {parts[-1]}"


def render_entry(updates: Sequence[tuple[str, str]], identity: str) -> str:
    """
    Render a changelog bullet for a set of upgrades.

    Args:
        updates: (name, new version) pairs in pin file order
        identity: Handle credited for the change

    Returns:
        Entry line without trailing newline
    """
    summary = join_names([f"{name} {version}" for name, version in updates])
    url = PROFILE_URL.format(identity=identity)
    return f"* {summary} [@{identity}]({url})"


def insert_entry(text: str, entry: str, insert_line: int = DEFAULT_INSERT_LINE) -> str:
    """
    Insert an entry at a fixed line offset.

    When the line at the offset is a heading, a blank line separates the
    entry from it.
    """
    lines = text.splitlines(keepends=True)
    insert_line = min(insert_line, len(lines))

    block = [entry + "\n"]
    if insert_line < len(lines) and lines[insert_line].startswith("#"):
        block.append("\n")
    elif insert_line == len(lines) and lines and not lines[-1].endswith("\n"):
        lines[-1] += "\n"

    return "".join(lines[:insert_line] + block + lines[insert_line:])


def prepend_entry(path: str | Path, entry: str, insert_line: int = DEFAULT_INSERT_LINE) -> None:
    """Insert an entry into a changelog file, replacing it atomically."""
    path = Path(path)
    with open(path, "r", encoding="utf-8", newline="") as f:
        text = f.read()
    atomic_write_text(path, insert_entry(text, entry, insert_line))
    logger.info(f"Changelog updated: {path}")


def _git_config(key: str) -> str:
    try:
        result = subprocess.run(
            ["git", "config", "--get", key],
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        return ""
    if result.returncode != 0:
        return ""
    return result.stdout.strip()


def lookup_identity(configured: str | None = None) -> str:
    """
    Find the handle to credit in changelog entries.

    Order: configured value, ``git config github.user``, ``git config user.name``.

    Raises:
        ConfigurationError: If no identity can be determined
    """
    if configured:
        return configured
    for key in ("github.user", "user.name"):
        value = _git_config(key)
        if value:
            logger.debug(f"Identity from git config {key}: {value}")
            return value
    raise ConfigurationError(
        "Could not determine changelog identity; set 'identity' in settings "
        "or 'git config github.user'"
    )
