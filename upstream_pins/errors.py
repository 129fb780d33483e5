"""
Exception hierarchy for upstream version checks.

Every error here is fatal for the run: nothing is recovered locally and the
CLI entry point is the only place they are caught.
"""


class PinCheckError(Exception):
    """Base class for all upstream-pins failures."""
    pass


class ConfigurationError(PinCheckError):
    """Raised when the registry, settings or a tracked item are misconfigured."""
    pass


class FetchError(PinCheckError):
    """Raised when fetching an upstream page fails."""
    pass


class NoVersionsFoundError(PinCheckError):
    """Raised when a fetched page yields no version candidates."""

    def __init__(self, name: str, url: str, body: str):
        self.name = name
        self.url = url
        self.body = body
        super().__init__(f"No versions found for {name} at {url}:\n{body}")


class UsageError(PinCheckError):
    """Raised for unsupported command-line arguments."""
    pass
