"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


class FakeClock:
    """Nanosecond monotonic clock stand-in; time moves only when advanced."""

    def __init__(self) -> None:
        self.now = 0

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += round(ms * 1_000_000)


@pytest.fixture
def clock():
    """Create a fake clock."""
    return FakeClock()


@pytest.fixture
def bus(clock):
    """Create EventBus driven by the fake clock."""
    from instrumenter.event_bus import EventBus

    return EventBus(clock=clock)


@pytest.fixture
def accumulator():
    """Bind a fresh accumulator to the test's context."""
    from instrumenter.timing import accumulator_scope

    with accumulator_scope() as acc:
        yield acc


@pytest.fixture
def config():
    """Create config for a 'github' namespace."""
    from instrumenter.config import InstrumentationConfig

    return InstrumentationConfig(namespace="github", label="GitHub")


@pytest.fixture
def instrumentation(config, bus, accumulator):
    """Create started Instrumentation on the test bus."""
    from instrumenter.app import Instrumentation

    inst = Instrumentation(config, bus=bus, accumulator=lambda: accumulator)
    inst.start()
    return inst


@pytest.fixture
def reporter(config, accumulator):
    """Create RuntimeReporter bound to the test accumulator."""
    from instrumenter.reporting import RuntimeReporter

    return RuntimeReporter(config, accumulator=lambda: accumulator)


@pytest.fixture
def subscriber(config, accumulator):
    """Create LogSubscriber bound to the test accumulator."""
    from instrumenter.reporting import LogSubscriber

    return LogSubscriber(config, accumulator=lambda: accumulator)
