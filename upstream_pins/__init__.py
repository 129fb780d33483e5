"""
Upstream pins - check pinned build dependencies against upstream releases.

Core Modules:
- Version: hybrid semantic/lexicographic version ordering
- Registry: per-item release page and scraping pattern
- Checker: background fetch and latest-version selection per item
- Orchestrator: fan-out/fan-in over the pin file, optional changelog/pin update
"""

__version__ = "1.0.0"

from .version import Version, compare_versions
from .errors import (
    PinCheckError,
    ConfigurationError,
    FetchError,
    NoVersionsFoundError,
    UsageError,
)
from .registry import FetchConfig, get_registry, load_registry, lookup
from .collectors import http_get, extract_versions, sort_versions, select_latest
from .checker import VersionChecker, start_background
from .pinfile import TrackedItem, parse_pins, read_pins, substitute_pins, write_pins
from .changelog import join_names, render_entry, insert_entry, prepend_entry, lookup_identity
from .config import Settings, load_settings, load_settings_file
from .orchestrator import CheckReport, PinUpdate, run
from .logging_config import setup_logging

__all__ = [
    "__version__",
    # Versions
    "Version",
    "compare_versions",
    # Errors
    "PinCheckError",
    "ConfigurationError",
    "FetchError",
    "NoVersionsFoundError",
    "UsageError",
    # Registry and collection
    "FetchConfig",
    "get_registry",
    "load_registry",
    "lookup",
    "http_get",
    "extract_versions",
    "sort_versions",
    "select_latest",
    # Checking
    "VersionChecker",
    "start_background",
    "CheckReport",
    "PinUpdate",
    "run",
    # Files
    "TrackedItem",
    "parse_pins",
    "read_pins",
    "substitute_pins",
    "write_pins",
    "join_names",
    "render_entry",
    "insert_entry",
    "prepend_entry",
    "lookup_identity",
    # Settings and logging
    "Settings",
    "load_settings",
    "load_settings_file",
    "setup_logging",
]
