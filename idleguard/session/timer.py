"""Inactivity session timer: warning countdown, then forced logout."""

import threading
from collections.abc import Callable
from dataclasses import dataclass

from idleguard.session.config import InactivityConfig
from idleguard.session.scheduler import Scheduler, ThreadingScheduler, TimerHandle


@dataclass(frozen=True)
class SessionActivityState:
    """Observable state of the inactivity timer."""

    last_activity: float  # Scheduler timestamp of the last reset
    warning_visible: bool
    seconds_remaining: int  # Meaningful only while warning_visible


StateListener = Callable[[SessionActivityState], None]


class InactivitySessionTimer:
    """Two-stage idle timer: a warning countdown followed by a logout callback.

    Any recognized activity, including activity while the warning is shown,
    clears the warning and re-arms both deadlines from the current moment.
    Pending callbacks are armed with a generation number; a callback that
    fires after its generation was superseded does nothing.
    """

    def __init__(
        self,
        config: InactivityConfig | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        """Initialize the timer.

        Args:
            config: Deadlines and debounce window. Defaults to 4 min / 5 min / 500 ms.
            scheduler: Clock used to arm deadlines. Defaults to threading timers.
        """
        self._config = config or InactivityConfig()
        self._scheduler: Scheduler = scheduler or ThreadingScheduler()
        self._lock = threading.Lock()

        self._on_logout: Callable[[], None] | None = None
        self._running = False
        self._generation = 0

        self._last_activity = 0.0
        self._warning_visible = False
        self._seconds_remaining = self._config.countdown_seconds

        self._warning_handle: TimerHandle | None = None
        self._logout_handle: TimerHandle | None = None
        self._tick_handle: TimerHandle | None = None

        self._listeners: list[StateListener] = []

    @property
    def config(self) -> InactivityConfig:
        return self._config

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._running

    @property
    def warning_visible(self) -> bool:
        with self._lock:
            return self._warning_visible

    @property
    def seconds_remaining(self) -> int:
        with self._lock:
            return self._seconds_remaining

    @property
    def last_activity(self) -> float:
        with self._lock:
            return self._last_activity

    def snapshot(self) -> SessionActivityState:
        """Return a consistent copy of the current state."""
        with self._lock:
            return self._snapshot_locked()

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener called with a snapshot on every state change.

        Listeners may be called from scheduler threads.

        Args:
            listener: Callback receiving the new state.

        Returns:
            Function that removes the listener.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def start(self, on_logout: Callable[[], None]) -> "InactivitySessionTimer":
        """Begin observing inactivity.

        If the scheduler cannot arm timers the timer stays stopped and
        no error is raised.

        Args:
            on_logout: Called with no arguments when the logout deadline elapses.

        Returns:
            This timer, usable as a handle or a context manager.

        Raises:
            RuntimeError: If the timer is already running.
        """
        with self._lock:
            if self._running:
                raise RuntimeError("Inactivity timer is already running")
            self._on_logout = on_logout
            self._running = True
            try:
                self._arm_locked()
            except RuntimeError as e:
                self._disable_locked(e)
                return self
            snapshot = self._snapshot_locked()

        print(
            f"[Session] Inactivity timer started "
            f"(warning in {self._config.warning_delay:g}s, "
            f"logout in {self._config.logout_delay:g}s)"
        )
        self._notify(snapshot)
        return self

    def reset_timer(self) -> None:
        """Clear the warning and re-arm both deadlines from now.

        If the deadlines cannot be re-armed the timer stops.
        """
        with self._lock:
            if not self._running:
                return
            was_visible = self._warning_visible
            try:
                self._arm_locked()
            except RuntimeError as e:
                self._disable_locked(e)
                was_visible = False
            snapshot = self._snapshot_locked()

        if was_visible:
            print("[Session] Activity during warning, session extended")
        self._notify(snapshot)

    def notify_activity(self) -> None:
        """Record an activity signal.

        Resets immediately unless the last reset is less than one debounce
        window old, in which case the signal is dropped.
        """
        with self._lock:
            if not self._running:
                return
            if self._scheduler.now() - self._last_activity < self._config.activity_debounce:
                return

        self.reset_timer()

    def stop(self) -> None:
        """Cancel every pending callback. Safe to call more than once."""
        with self._lock:
            if not self._running:
                return
            self._teardown_locked()
            snapshot = self._snapshot_locked()
        self._notify(snapshot)

    def __enter__(self) -> "InactivitySessionTimer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def _arm_locked(self) -> None:
        """Cancel pending callbacks and arm both deadlines from now."""
        self._cancel_all_locked()
        self._generation += 1
        generation = self._generation

        self._last_activity = self._scheduler.now()
        self._warning_visible = False
        self._seconds_remaining = self._config.countdown_seconds

        self._warning_handle = self._scheduler.call_later(
            self._config.warning_delay, lambda: self._on_warning_deadline(generation)
        )
        self._logout_handle = self._scheduler.call_later(
            self._config.logout_delay, lambda: self._on_logout_deadline(generation)
        )

    def _cancel_all_locked(self) -> None:
        for handle in (self._warning_handle, self._logout_handle, self._tick_handle):
            if handle is not None:
                handle.cancel()
        self._warning_handle = None
        self._logout_handle = None
        self._tick_handle = None

    def _teardown_locked(self) -> None:
        self._cancel_all_locked()
        self._generation += 1
        self._running = False
        self._warning_visible = False
        self._seconds_remaining = self._config.countdown_seconds

    def _disable_locked(self, error: RuntimeError) -> None:
        """Stop after the scheduler refused to arm a callback."""
        self._teardown_locked()
        print(f"[Session] Cannot arm inactivity timer, timeout disabled: {error}")

    def _is_current(self, generation: int) -> bool:
        return self._running and generation == self._generation

    def _on_warning_deadline(self, generation: int) -> None:
        with self._lock:
            if not self._is_current(generation):
                return
            self._warning_handle = None
            self._warning_visible = True
            self._seconds_remaining = self._config.countdown_seconds
            try:
                self._tick_handle = self._scheduler.call_later(
                    self._config.tick_interval, lambda: self._on_tick(generation)
                )
            except RuntimeError as e:
                self._disable_locked(e)
            snapshot = self._snapshot_locked()

        if snapshot.warning_visible:
            print(f"[Session] Inactivity warning: logout in {snapshot.seconds_remaining}s")
        self._notify(snapshot)

    def _on_tick(self, generation: int) -> None:
        with self._lock:
            if not self._is_current(generation) or not self._warning_visible:
                return
            self._seconds_remaining = max(0, self._seconds_remaining - 1)
            self._tick_handle = None
            if self._seconds_remaining > 0:
                try:
                    self._tick_handle = self._scheduler.call_later(
                        self._config.tick_interval, lambda: self._on_tick(generation)
                    )
                except RuntimeError as e:
                    self._disable_locked(e)
            snapshot = self._snapshot_locked()

        self._notify(snapshot)

    def _on_logout_deadline(self, generation: int) -> None:
        with self._lock:
            if not self._is_current(generation):
                return
            on_logout = self._on_logout
            self._teardown_locked()
            snapshot = self._snapshot_locked()

        print("[Session] Inactivity timeout reached, logging out")
        self._notify(snapshot)
        if on_logout is None:
            return
        try:
            on_logout()
        except Exception as e:
            print(f"[Session] Logout callback failed: {e}")

    def _snapshot_locked(self) -> SessionActivityState:
        return SessionActivityState(
            last_activity=self._last_activity,
            warning_visible=self._warning_visible,
            seconds_remaining=self._seconds_remaining,
        )

    def _notify(self, snapshot: SessionActivityState) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(snapshot)
            except Exception as e:
                print(f"[Session] State listener failed: {e}")
