"""Pytest fixtures for all tests."""

import io

import pytest

import rid.identifier
import rid.logging
from rid import Rid
from rid.logging import LogLevel, StructuredLogger

# 2023-11-14T22:13:20Z
T0 = 1_700_000_000_000_000_000


class FakeClock:
    """Settable nanosecond clock."""

    def __init__(self, now=T0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ns):
        self.now += ns


class FakeEntropy:
    """Deterministic byte source: 0x00.., 0x01.., 0x02.."""

    def __init__(self):
        self.calls = 0

    def __call__(self, n):
        value = bytes([self.calls % 256]) * n
        self.calls += 1
        return value


@pytest.fixture
def clock():
    """Create a fake clock at T0."""
    return FakeClock()


@pytest.fixture
def entropy():
    """Create a deterministic entropy source."""
    return FakeEntropy()


@pytest.fixture
def user_rid(clock, entropy):
    """Create a deterministic user rid."""
    return Rid.new("user", clock=clock, entropy=entropy)


@pytest.fixture
def log_stream():
    """Capture structured log output at DEBUG level."""
    stream = io.StringIO()
    StructuredLogger.configure(min_level=LogLevel.DEBUG, stream=stream)
    yield stream
    rid.logging._logger = None


@pytest.fixture
def skew():
    """Restore the default parse tolerance after the test."""
    yield rid.identifier.configure
    rid.identifier.configure(skew_ns=0)
