"""Runtime controller that ties the session timer to the window."""

import os
import queue
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Any

import pygame
import yaml
from dotenv import load_dotenv

from idleguard.session.activity import ActivityMonitor
from idleguard.session.config import InactivityConfig
from idleguard.session.scheduler import Scheduler
from idleguard.session.timer import InactivitySessionTimer
from idleguard.ui.warning_dialog import InactivityWarningDialog
from idleguard.ui.window import SessionWindow

DEFAULT_CONFIG_PATH = Path("config/default.yaml")
CONFIG_ENV_VAR = "IDLEGUARD_CONFIG"


class RuntimeState(Enum):
    """Runtime controller states."""

    STARTING = auto()
    SIGNED_OUT = auto()
    SIGNED_IN = auto()
    STOPPING = auto()


@dataclass
class UserConfig:
    """The account shown in the signed-in view."""

    display_name: str = "Owner"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserConfig":
        """Create from dictionary."""
        return cls(display_name=str(data.get("display_name", "Owner")))


class RuntimeController:
    """Owns the window and, while signed in, the inactivity timer."""

    LOGOUT_NOTICE = "You were logged out due to inactivity."

    def __init__(
        self,
        config_path: Path | None = None,
        on_logout: Callable[[], None] | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        """Initialize the runtime controller.

        Args:
            config_path: Path to configuration YAML file.
            on_logout: Extra action run when the session ends for inactivity,
                e.g. revoking the backend session.
            scheduler: Clock for the inactivity timer. Defaults to threading timers.
        """
        # Load environment variables
        load_dotenv()

        self.config = self._load_config(config_path)
        self.session_config = InactivityConfig.from_dict(self.config.get("session", {}))
        self.user_config = UserConfig.from_dict(self.config.get("user", {}))

        self._state = RuntimeState.STARTING
        self._running = False
        self._on_logout = on_logout
        self._scheduler = scheduler

        self._window: SessionWindow | None = None
        self._dialog: InactivityWarningDialog | None = None
        self._timer: InactivitySessionTimer | None = None
        self._monitor: ActivityMonitor | None = None

        # Expired timers reported from timer threads, handled on the main thread
        self._logout_queue: queue.Queue[InactivitySessionTimer] = queue.Queue()

    @property
    def state(self) -> RuntimeState:
        return self._state

    @property
    def timer(self) -> InactivitySessionTimer | None:
        return self._timer

    def _load_config(self, config_path: Path | None) -> dict[str, Any]:
        """Load configuration from YAML file.

        Args:
            config_path: Path to config file. Falls back to $IDLEGUARD_CONFIG,
                then config/default.yaml.

        Returns:
            Configuration dictionary.
        """
        if config_path is None:
            env_path = os.environ.get(CONFIG_ENV_VAR)
            config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

        if config_path.exists():
            with open(config_path) as f:
                loaded: dict[str, Any] = yaml.safe_load(f) or {}
                return loaded

        # Return minimal default config
        return {
            "session": {},
            "window": {"resolution": [800, 600], "fps": 30, "title": "Back Office"},
            "user": {"display_name": "Owner"},
        }

    def start(self) -> None:
        """Open the window, sign in and run the main loop."""
        self.setup()
        print("Idleguard started. Press ESC to quit.")

        self._main_loop()

    def setup(self) -> None:
        """Open the window, wire the dialog and sign in."""
        self._state = RuntimeState.STARTING
        self._running = True

        self._window = SessionWindow.from_config(self.config.get("window", {}))
        self._window.initialize()
        self._dialog = InactivityWarningDialog(
            self._window.resolution,
            on_stay_logged_in=self._on_stay_logged_in,
            theme=self._window.theme,
        )
        self._window.dialog = self._dialog
        self._window.on_input = self._on_input
        self._window.on_sign_in = self.sign_in

        self.sign_in()

    @property
    def window(self) -> SessionWindow | None:
        return self._window

    @property
    def dialog(self) -> InactivityWarningDialog | None:
        return self._dialog

    def stop(self) -> None:
        """Tear down the session and the window."""
        self._state = RuntimeState.STOPPING
        self._running = False

        self._end_timer()

        if self._window:
            self._window.shutdown()

        print("Idleguard stopped.")

    def sign_in(self) -> None:
        """Enter the signed-in view and start watching for inactivity."""
        if self._state == RuntimeState.SIGNED_IN:
            return

        timer = InactivitySessionTimer(self.session_config, self._scheduler)
        self._timer = timer
        self._monitor = ActivityMonitor(timer)
        timer.start(on_logout=lambda: self._logout_queue.put(timer))

        self._state = RuntimeState.SIGNED_IN
        if self._window:
            self._window.show_signed_in(self.user_config.display_name)
        print(f"[Session] Signed in as {self.user_config.display_name}")

    def sign_out(self, notice: str = "") -> None:
        """Leave the signed-in view, cancelling every pending timer."""
        if self._state != RuntimeState.SIGNED_IN:
            return

        self._end_timer()
        self._state = RuntimeState.SIGNED_OUT
        if self._window:
            self._window.show_signed_out(notice)
        print("[Session] Signed out")

    def _end_timer(self) -> None:
        if self._timer is not None:
            self._timer.stop()
        self._timer = None
        self._monitor = None

    def _main_loop(self) -> None:
        """Main render/event loop."""
        while self._running and self._window:
            self.process_pending()

            if not self._window.run_frame():
                break

        self.stop()

    def process_pending(self) -> None:
        """Apply timer output on the main thread (logout, dialog state)."""
        try:
            expired = self._logout_queue.get_nowait()
            self._handle_inactivity_logout(expired)
        except queue.Empty:
            pass

        if self._dialog is not None:
            if self._timer is not None:
                state = self._timer.snapshot()
                self._dialog.update(state.warning_visible, state.seconds_remaining)
            else:
                self._dialog.update(False, 0)

    def _on_input(self, event: pygame.event.Event) -> None:
        if self._monitor is not None:
            self._monitor.process_event(event)

    def _on_stay_logged_in(self) -> None:
        if self._timer is not None:
            self._timer.reset_timer()

    def _handle_inactivity_logout(self, expired: InactivitySessionTimer) -> None:
        # Ignore timers from a session that already ended
        if self._state != RuntimeState.SIGNED_IN or expired is not self._timer:
            return

        self.sign_out(notice=self.LOGOUT_NOTICE)

        if self._on_logout is not None:
            try:
                self._on_logout()
            except Exception as e:
                print(f"[Session] Logout action failed: {e}")
