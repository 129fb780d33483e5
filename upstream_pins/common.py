"""
Common utilities shared across upstream_pins modules.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path


def is_debug_enabled() -> bool:
    """Check if debug output was requested through the environment."""
    return os.environ.get("UPSTREAM_PINS_DEBUG", "0") == "1"


def atomic_write_text(path: str | Path, text: str) -> None:
    """
    Replace a file's contents atomically.

    Writes to a sibling temp file, then renames it over the target, so a
    crash mid-write leaves the original file intact. Symlinks are followed
    and the target's permission bits are kept.

    Args:
        path: File to replace
        text: New contents

    Raises:
        OSError: If the file cannot be written
    """
    path = Path(path).resolve()
    temp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        with open(temp_path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        if path.exists():
            shutil.copymode(path, temp_path)
        temp_path.replace(path)
    except OSError as e:
        temp_path.unlink(missing_ok=True)
        raise OSError(f"Failed to write {path}: {e}") from e
