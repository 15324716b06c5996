"""Pytest configuration and shared fixtures for elbowroute tests."""

import pytest

from elbowroute import BlockRect, ElbowRouter


class RecordingSink:
    """Diagnostic sink that keeps everything it receives."""

    def __init__(self):
        self.diagnostics = []

    def __call__(self, diagnostic):
        self.diagnostics.append(diagnostic)

    @property
    def codes(self):
        return [d.code for d in self.diagnostics]


@pytest.fixture
def block_a():
    """100x100 block at the origin."""
    return BlockRect(position=(0, 0), size=(100, 100))


@pytest.fixture
def block_b():
    """100x100 block to the right of block_a, with a 200 unit gap."""
    return BlockRect(position=(300, 0), size=(100, 100))


@pytest.fixture
def sink():
    """Sink that records diagnostics for inspection."""
    return RecordingSink()


@pytest.fixture
def router(sink):
    """Router reporting into the recording sink."""
    return ElbowRouter(sink=sink)


@pytest.fixture
def debug_router(sink):
    """Router with tracing enabled."""
    return ElbowRouter(sink=sink, debug=True)
