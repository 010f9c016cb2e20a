"""Deferred callback scheduling for session timers."""

import threading
import time
from collections.abc import Callable
from typing import Protocol


class TimerHandle(Protocol):
    """A pending deferred callback."""

    def cancel(self) -> None:
        """Cancel the callback if it has not fired yet."""
        ...


class Scheduler(Protocol):
    """Protocol for clocks that can run a callback after a delay."""

    def now(self) -> float:
        """Current time in seconds (monotonic).

        Returns:
            Timestamp in seconds.
        """
        ...

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run a callback once after a delay.

        Args:
            delay: Delay in seconds.
            callback: Function to call with no arguments.

        Returns:
            Handle that can cancel the callback.
        """
        ...


class ThreadingScheduler:
    """Scheduler backed by daemon ``threading.Timer`` threads."""

    def now(self) -> float:
        return time.monotonic()

    def call_later(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(max(delay, 0.0), callback)
        timer.daemon = True
        timer.start()
        return timer
