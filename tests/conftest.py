"""Shared test fixtures."""
import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `src.*` imports work
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


class FakeClock:
    """Monotonic clock that only moves when told to (or when slept on)."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeController:
    """Stands in for pynput's keyboard.Controller and records every event."""

    def __init__(self, clock=None, snapshot=None) -> None:
        self._clock    = clock or (lambda: 0.0)
        self._snapshot = snapshot or (lambda: None)
        self.events: list[tuple[str, str, float, object]] = []

    def press(self, key) -> None:
        self.events.append(("press", key, self._clock(), self._snapshot()))

    def release(self, key) -> None:
        self.events.append(("release", key, self._clock(), self._snapshot()))

    @property
    def keys(self) -> list[tuple[str, str]]:
        return [(action, key) for action, key, _, _ in self.events]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def controller(clock):
    return FakeController(clock)
