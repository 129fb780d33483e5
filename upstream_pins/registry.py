"""
Fetch configuration registry.

Maps each tracked item name to the page that lists its releases and the
pattern that scrapes version strings off that page. The registry is read
from YAML once and exposed as a read-only mapping shared by every checker.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# Packaged registry, used unless overridden by settings or environment
DEFAULT_SOURCES_FILE = Path(__file__).parent / "data" / "sources.yml"

SOURCES_ENV_VAR = "UPSTREAM_PINS_SOURCES"

_default_registry: Mapping[str, "FetchConfig"] | None = None


@dataclass(frozen=True)
class FetchConfig:
    """
    Where and how to look for a tracked item's releases.

    Attributes:
        url: Page or feed to fetch
        pattern: Compiled regex with one or more capturing groups
    """
    url: str
    pattern: re.Pattern[str]

    @staticmethod
    def from_dict(name: str, data: Any) -> FetchConfig:
        """Create FetchConfig from a registry entry."""
        if not isinstance(data, dict):
            raise ConfigurationError(f"Registry entry '{name}' must be a mapping")

        url = data.get("url")
        regexp = data.get("regexp")
        if not url or not regexp:
            raise ConfigurationError(f"Registry entry '{name}' needs both 'url' and 'regexp'")

        try:
            pattern = re.compile(regexp)
        except re.error as e:
            raise ConfigurationError(f"Registry entry '{name}' has an invalid regexp: {e}") from e

        if pattern.groups < 1:
            raise ConfigurationError(f"Registry entry '{name}' regexp has no capture group")

        return FetchConfig(url=str(url), pattern=pattern)


def load_registry(path: str | Path) -> Mapping[str, FetchConfig]:
    """
    Load a registry file.

    Args:
        path: Path to a YAML file with a top-level ``sources`` mapping

    Returns:
        Read-only mapping of item name to FetchConfig

    Raises:
        ConfigurationError: If the file is missing or malformed
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Could not read registry {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in registry {path}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("sources"), dict):
        raise ConfigurationError(f"Registry {path} must contain a 'sources' mapping")

    entries = {
        str(name): FetchConfig.from_dict(str(name), entry)
        for name, entry in data["sources"].items()
    }
    logger.debug(f"Loaded {len(entries)} registry entries from {path}")
    return MappingProxyType(entries)


def get_registry(path: str | Path | None = None) -> Mapping[str, FetchConfig]:
    """
    Get the process-wide registry.

    An explicit path is always loaded fresh. Otherwise the file named by
    UPSTREAM_PINS_SOURCES, or the packaged default, is loaded once and cached.

    Args:
        path: Optional registry file overriding the default

    Returns:
        Read-only mapping of item name to FetchConfig
    """
    global _default_registry
    if path is not None:
        return load_registry(path)
    if _default_registry is None:
        _default_registry = load_registry(os.environ.get(SOURCES_ENV_VAR) or DEFAULT_SOURCES_FILE)
    return _default_registry


def lookup(registry: Mapping[str, FetchConfig], name: str) -> FetchConfig:
    """
    Resolve a tracked item's fetch configuration.

    Raises:
        ConfigurationError: If the registry has no entry for name
    """
    try:
        return registry[name]
    except KeyError:
        raise ConfigurationError(f"No fetch configuration for '{name}'") from None
