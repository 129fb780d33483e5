"""
Version collection from upstream release pages.

The network part (http_get) is kept apart from the scraping part
(extract_versions, select_latest) so pages can be checked against canned
bodies without network access.
"""

from __future__ import annotations

import logging
import re
import urllib.request
from typing import Iterable

from .errors import FetchError
from .version import Version

logger = logging.getLogger(__name__)

USER_AGENT = "upstream-pins/1.0"


def http_get(url: str, headers: dict[str, str] | None = None) -> str:
    """Perform HTTP GET request and return the body as text.

    The URL scheme decides whether TLS is used. No timeout is applied.

    Args:
        url: URL to fetch
        headers: Optional HTTP headers

    Returns:
        Response body decoded as text

    Raises:
        FetchError: If request fails
    """
    try:
        default_headers = {"User-Agent": USER_AGENT}
        if headers:
            default_headers.update(headers)

        req = urllib.request.Request(url, headers=default_headers)
        with urllib.request.urlopen(req) as response:
            charset = response.headers.get_content_charset() or "utf-8"
            return response.read().decode(charset, errors="replace")
    except Exception as e:
        raise FetchError(f"Failed to fetch {url}: {e}") from e


def extract_versions(body: str, pattern: str | re.Pattern[str]) -> list[str]:
    """Extract every candidate version string from a page body.

    Each match yields one candidate. Patterns with several capture groups
    (e.g. ``lcms2-(\\d+)\\.(\\d+)``) have the non-empty groups of a match
    joined with ``.``.

    Args:
        body: Fetched page text
        pattern: Regular expression with at least one capture group

    Returns:
        Candidate version strings in page order (may contain duplicates)
    """
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    candidates = []
    for match in regex.finditer(body):
        groups = [g for g in match.groups() if g]
        if groups:
            candidates.append(".".join(groups))
    return candidates


def sort_versions(candidates: Iterable[str]) -> list[Version]:
    """Sort candidate strings ascending using Version ordering."""
    return sorted(Version(c) for c in candidates)


def select_latest(candidates: Iterable[str]) -> Version | None:
    """Pick the highest version from scraped candidates.

    Pages may list releases in any order, so the maximum after sorting wins,
    not the first entry on the page.

    Returns:
        Highest Version, or None if there are no candidates
    """
    ordered = sort_versions(candidates)
    if not ordered:
        return None
    return ordered[-1]
