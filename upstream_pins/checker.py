"""
Per-item upstream version checks running in the background.

Each VersionChecker starts fetching as soon as it is constructed. The result
lives in a concurrent.futures.Future owned by that checker alone, so checkers
share no mutable state and need no locks. Reading the latest version blocks
only until that checker's own fetch has finished; later reads are cached.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from typing import Callable, Mapping

from .collectors import extract_versions, http_get, select_latest
from .errors import NoVersionsFoundError
from .registry import FetchConfig, lookup
from .version import Version

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], str]


def start_background(fn: Callable[[], Version], name: str) -> "Future[Version]":
    """
    Run fn on a dedicated daemon thread and return its future.

    There is no pool and no bound: every call gets its own thread. A
    ThreadPoolExecutor is not used because its workers are joined at
    interpreter exit, so a hung fetch (there is no timeout) would keep a
    failed run from exiting; daemon threads are abandoned instead.
    """
    future: Future[Version] = Future()
    future.set_running_or_notify_cancel()

    def runner() -> None:
        try:
            future.set_result(fn())
        except BaseException as e:
            future.set_exception(e)

    thread = threading.Thread(target=runner, name=f"upstream-{name}", daemon=True)
    thread.start()
    return future


class VersionChecker:
    """
    Checks one tracked item against its upstream release page.

    Attributes:
        name: Registry key of the tracked item
        current_version: Version pinned in the pin file
        config: Fetch configuration resolved from the registry
    """

    def __init__(
        self,
        name: str,
        current_version: Version | str,
        registry: Mapping[str, FetchConfig],
        fetch: Fetcher = http_get,
    ):
        """
        Resolve the item's configuration and start fetching immediately.

        Raises:
            ConfigurationError: If name has no registry entry
        """
        if isinstance(current_version, str):
            current_version = Version(current_version)
        self.name = name
        self.current_version = current_version
        self.config = lookup(registry, name)
        self._fetch = fetch
        self._future = start_background(self._resolve, name)

    def _resolve(self) -> Version:
        logger.debug(f"Fetching {self.name} from {self.config.url}")
        body = self._fetch(self.config.url)

        candidates = extract_versions(body, self.config.pattern)
        logger.debug(f"{self.name}: {len(candidates)} version candidates")

        latest = select_latest(candidates)
        if latest is None:
            raise NoVersionsFoundError(self.name, self.config.url, body)
        return latest

    def latest_version(self) -> Version:
        """
        Highest upstream version, blocking until the fetch completes.

        Raises:
            FetchError: If the page could not be fetched
            NoVersionsFoundError: If the page had no matching versions
        """
        return self._future.result()

    def changed(self) -> bool:
        """Whether upstream differs from the pinned version."""
        return self.latest_version() != self.current_version

    def name_and_latest(self) -> str:
        return f"{self.name} {self.latest_version()}"

    def done(self) -> bool:
        """Whether the background fetch has finished (without blocking)."""
        return self._future.done()

    def __repr__(self) -> str:
        return f"VersionChecker({self.name!r}, current={self.current_version.raw!r})"
