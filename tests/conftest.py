"""Shared fixtures for upstream_pins tests."""

import re
import threading

import pytest

from upstream_pins.registry import FetchConfig


def make_config(url: str, pattern: str) -> FetchConfig:
    return FetchConfig(url=url, pattern=re.compile(pattern))


@pytest.fixture
def registry():
    """Small in-memory registry keyed by canned URLs."""
    return {
        "foo": make_config("https://foo.example/releases", r"foo-(\d+\.\d+\.\d+)\.tar"),
        "bar": make_config("https://bar.example/files/", r"bar-v(\d+[a-z]?)\.zip"),
    }


class CannedFetcher:
    """Fetch stand-in serving fixed bodies per URL, with optional gates."""

    def __init__(self, bodies: dict[str, str]):
        self.bodies = dict(bodies)
        self.gates: dict[str, threading.Event] = {}
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def gate(self, url: str) -> threading.Event:
        event = threading.Event()
        self.gates[url] = event
        return event

    def __call__(self, url: str) -> str:
        with self._lock:
            self.calls.append(url)
        gate = self.gates.get(url)
        if gate is not None:
            gate.wait()
        body = self.bodies[url]
        if isinstance(body, Exception):
            raise body
        return body


@pytest.fixture
def fetcher():
    return CannedFetcher({
        "https://foo.example/releases": "foo-1.0.0.tar foo-1.1.0.tar",
        "https://bar.example/files/": "bar-v9.zip bar-v9b.zip",
    })
