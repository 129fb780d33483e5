"""
Pin file parsing and rewriting.

The pin file is a build configuration (usually a Makefile) where each tracked
item is pinned by a line like ``ZLIB_VER := 1.2.11``. The uppercase name maps
to the lowercase registry key.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .common import atomic_write_text
from .version import Version

PIN_LINE = re.compile(r"^(?P<name>[A-Z]+)_VER := (?P<value>\S+)", re.MULTILINE)


@dataclass(frozen=True)
class TrackedItem:
    """A pinned dependency: registry name plus its current version."""
    name: str
    current_version: Version


def parse_pins(text: str) -> list[TrackedItem]:
    """
    Parse pin lines in file order.

    Args:
        text: Pin file contents

    Returns:
        Tracked items in the order they appear
    """
    return [
        TrackedItem(name=m.group("name").lower(), current_version=Version(m.group("value")))
        for m in PIN_LINE.finditer(text)
    ]


def read_pins(path: str | Path) -> list[TrackedItem]:
    """Read and parse a pin file."""
    return parse_pins(Path(path).read_text(encoding="utf-8"))


def substitute_pins(text: str, versions: Mapping[str, Version | str]) -> str:
    """
    Replace the version token of every pin line whose item is in versions.

    All other text is left untouched.

    Args:
        text: Pin file contents
        versions: New version per lowercase item name

    Returns:
        Updated contents
    """
    def replace(match: re.Match[str]) -> str:
        name = match.group("name")
        new = versions.get(name.lower())
        if new is None:
            return match.group(0)
        return f"{name}_VER := {new}"

    return PIN_LINE.sub(replace, text)


def write_pins(path: str | Path, versions: Mapping[str, Version | str]) -> None:
    """Rewrite a pin file in place with the given versions."""
    path = Path(path)
    with open(path, "r", encoding="utf-8", newline="") as f:
        text = f.read()
    atomic_write_text(path, substitute_pins(text, versions))
