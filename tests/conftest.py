"""Shared test fixtures."""

import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

# Headless Pygame for window and dialog tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame  # noqa: E402
import pytest  # noqa: E402

from idleguard.session.config import InactivityConfig  # noqa: E402
from idleguard.session.timer import InactivitySessionTimer  # noqa: E402


@dataclass
class ManualHandle:
    """Pending callback on a ManualScheduler."""

    when: float
    seq: int
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual clock: callbacks only run when the test advances time."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._seq = 0
        self._pending: list[ManualHandle] = []

    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(self._now + max(delay, 0.0), self._seq, callback)
        self._seq += 1
        self._pending.append(handle)
        return handle

    @property
    def pending_count(self) -> int:
        return sum(1 for h in self._pending if not h.cancelled)

    def advance(self, seconds: float) -> None:
        """Move the clock forward, running due callbacks in order."""
        target = self._now + seconds
        while True:
            due = [h for h in self._pending if not h.cancelled and h.when <= target]
            if not due:
                break
            handle = min(due, key=lambda h: (h.when, h.seq))
            self._pending.remove(handle)
            self._now = handle.when
            handle.callback()
        self._pending = [h for h in self._pending if not h.cancelled]
        self._now = target

    def advance_to(self, timestamp: float) -> None:
        self.advance(timestamp - self._now)


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Create a virtual clock starting at t=0."""
    return ManualScheduler()


@pytest.fixture
def inactivity_config() -> InactivityConfig:
    """Create the production inactivity configuration."""
    return InactivityConfig()


@pytest.fixture
def timer(inactivity_config: InactivityConfig, scheduler: ManualScheduler):
    """Create an inactivity timer on the virtual clock."""
    t = InactivitySessionTimer(config=inactivity_config, scheduler=scheduler)
    yield t
    t.stop()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a test configuration file."""
    path = tmp_path / "config.yaml"
    path.write_text(
        """
session:
  warning_delay_seconds: 240
  logout_delay_seconds: 300
  activity_debounce_ms: 500
window:
  resolution: [640, 480]
  fps: 20
  title: "Test Office"
user:
  display_name: "Dana"
"""
    )
    return path


@pytest.fixture
def init_pygame():
    """Initialize pygame with a tiny headless display."""
    pygame.init()
    pygame.display.set_mode((1, 1))
    yield
    pygame.quit()
