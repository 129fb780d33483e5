"""
Comparable version value type.

A Version always keeps the raw string it was built from. Strings made only of
dot-separated numbers also get a parsed form, compared with
``packaging.version`` semantics (``1.2 == 1.2.0``). Anything else, such as
``9b``, compares as a plain string.
"""

from __future__ import annotations

import functools
import re

from packaging import version as pkg_version

_DOTTED_NUMERIC = re.compile(r"^\d+(?:\.\d+)*$")


@functools.total_ordering
class Version:
    """Version string with hybrid semantic/lexicographic ordering.

    Two Versions compare by their parsed forms when both have one, and by
    raw string otherwise. Mixing a parsed and an unparsed Version therefore
    falls back to string comparison.
    """

    __slots__ = ("_raw", "_parsed")

    def __init__(self, raw: str):
        raw = raw.strip()
        parsed = None
        if _DOTTED_NUMERIC.match(raw):
            parsed = pkg_version.Version(raw)
        object.__setattr__(self, "_raw", raw)
        object.__setattr__(self, "_parsed", parsed)

    def __setattr__(self, name, value):
        raise AttributeError("Version is immutable")

    @property
    def raw(self) -> str:
        return self._raw

    @property
    def parsed(self) -> pkg_version.Version | None:
        return self._parsed

    def _key_pair(self, other: "Version") -> tuple:
        if self._parsed is not None and other._parsed is not None:
            return self._parsed, other._parsed
        return self._raw, other._raw

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        mine, theirs = self._key_pair(other)
        return mine == theirs

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        mine, theirs = self._key_pair(other)
        return mine < theirs

    def __hash__(self) -> int:
        if self._parsed is not None:
            return hash(self._parsed)
        return hash(self._raw)

    def __str__(self) -> str:
        return self._raw

    def __repr__(self) -> str:
        return f"Version({self._raw!r})"


def compare_versions(v1: str, v2: str) -> int:
    """
    Compare two version strings.

    Args:
        v1: First version
        v2: Second version

    Returns:
        -1 if v1 < v2, 0 if v1 == v2, 1 if v1 > v2
    """
    a, b = Version(v1), Version(v2)
    if a < b:
        return -1
    elif a > b:
        return 1
    return 0
