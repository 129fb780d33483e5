"""
Settings file parsing and management.

Settings are read from YAML files and merged by priority
(custom path → project → user → defaults).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from typing import Any

import yaml

from .changelog import DEFAULT_INSERT_LINE
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "UPSTREAM_PINS_CONFIG"

# Settings file locations (in priority order)
CONFIG_LOCATIONS = [
    ".upstream-pins.yml",                                       # Project root
    ".upstream-pins.yaml",
    os.path.expanduser("~/.config/upstream-pins/config.yml"),   # User global
]

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings.

    Attributes:
        pin_file: Build file holding the NAME_VER pins
        changelog: Changelog that receives update entries
        changelog_insert_line: 0-based line where entries are inserted
        identity: Handle credited in changelog entries (git config if unset)
        sources: Registry file overriding the packaged one
        log_level: Console log level
        log_file: Optional log file path
        source: Path of the settings file that was loaded
    """
    pin_file: str = "Makefile"
    changelog: str = "CHANGELOG.md"
    changelog_insert_line: int = DEFAULT_INSERT_LINE
    identity: str | None = None
    sources: str | None = None
    log_level: str = "INFO"
    log_file: str | None = None
    source: str = ""

    def __post_init__(self):
        """Validate settings after initialization."""
        for name in ("pin_file", "changelog", "log_level"):
            if not isinstance(getattr(self, name), str):
                raise ConfigurationError(f"Invalid {name}: {getattr(self, name)!r}. Must be a string")

        for name in ("identity", "sources", "log_file"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ConfigurationError(f"Invalid {name}: {value!r}. Must be a string")

        insert_line = self.changelog_insert_line
        if not isinstance(insert_line, int) or isinstance(insert_line, bool) or insert_line < 0:
            raise ConfigurationError(
                f"Invalid changelog_insert_line: {self.changelog_insert_line}. "
                "Must be a non-negative integer"
            )

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log_level: {self.log_level}. "
                f"Must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}"
            )

        if not self.pin_file or not self.changelog:
            raise ConfigurationError("pin_file and changelog must not be empty")

    @staticmethod
    def from_dict(data: dict[str, Any], source: str = "") -> Settings:
        """Create Settings from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(Settings)} - {"source"}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown settings in {source}: {', '.join(sorted(unknown))}")
        return Settings(source=source, **{k: v for k, v in data.items() if k in known})

    def merge_with(self, other: Settings) -> Settings:
        """
        Merge with lower-priority settings.

        Fields left at their default here are taken from other.
        """
        defaults = Settings()
        merged = {}
        for f in fields(Settings):
            mine = getattr(self, f.name)
            merged[f.name] = mine if mine != getattr(defaults, f.name) else getattr(other, f.name)
        return Settings(**merged)


def load_settings_file(file_path: str) -> Settings | None:
    """
    Load settings from a single YAML file.

    Returns:
        Settings, or None if the file does not exist

    Raises:
        ConfigurationError: If the file exists but is invalid
    """
    if not os.path.exists(file_path):
        return None

    logger.debug(f"Loading settings from: {file_path}")
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Invalid settings file {file_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file {file_path} must contain a mapping")

    try:
        return Settings.from_dict(data, source=file_path)
    except TypeError as e:
        raise ConfigurationError(f"Invalid settings in {file_path}: {e}") from e


def load_settings(custom_path: str | None = None) -> Settings:
    """
    Load and merge settings from all sources.

    Precedence (highest to lowest):
    1. custom_path, or UPSTREAM_PINS_CONFIG
    2. Project .upstream-pins.yml
    3. User ~/.config/upstream-pins/config.yml
    4. Defaults

    Raises:
        ConfigurationError: If a custom path is given but cannot be loaded
    """
    found: list[Settings] = []

    custom_path = custom_path or os.environ.get(CONFIG_ENV_VAR)
    if custom_path:
        settings = load_settings_file(custom_path)
        if settings is None:
            raise ConfigurationError(f"Could not load settings from specified path: {custom_path}")
        found.append(settings)

    for location in CONFIG_LOCATIONS:
        settings = load_settings_file(location)
        if settings is not None:
            found.append(settings)

    if not found:
        logger.debug("No settings files found, using defaults")
        return Settings()

    merged = found[0]
    for settings in found[1:]:
        merged = merged.merge_with(settings)

    logger.debug(f"Merged {len(found)} settings files")
    return merged
