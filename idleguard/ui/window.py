"""Back office window rendered with Pygame."""

from collections.abc import Callable
from enum import Enum, auto
from typing import Any

import pygame

from idleguard.ui.theme import Theme, hex_to_rgb
from idleguard.ui.warning_dialog import InactivityWarningDialog


class WindowState(Enum):
    """Which screen the window shows."""

    SIGNED_OUT = auto()
    SIGNED_IN = auto()


class SessionWindow:
    """Minimal signed-in / signed-out shell hosting the inactivity dialog."""

    def __init__(
        self,
        resolution: tuple[int, int] = (800, 600),
        fps: int = 30,
        title: str = "Back Office",
        theme: Theme | None = None,
    ) -> None:
        """Initialize the window.

        Args:
            resolution: Window resolution (width, height).
            fps: Target frames per second.
            title: Window caption.
            theme: Colors. Defaults to the built-in theme.
        """
        self.resolution = resolution
        self.fps = fps
        self.title = title
        self.theme = theme or Theme()
        self._state = WindowState.SIGNED_OUT
        self._user_name = ""
        self._notice = ""

        # Pygame state
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._heading_font: pygame.font.Font | None = None

        self.dialog: InactivityWarningDialog | None = None

        # Sees every event before the dialog does (passive activity listeners)
        self.on_input: Callable[[pygame.event.Event], object] | None = None
        self.on_sign_in: Callable[[], None] | None = None

    def initialize(self) -> None:
        """Initialize Pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.title)
        self._screen = pygame.display.set_mode(self.resolution)
        self._clock = pygame.time.Clock()
        self._font = pygame.font.Font(None, 26)
        self._heading_font = pygame.font.Font(None, 40)

    def shutdown(self) -> None:
        """Shutdown Pygame."""
        self._screen = None
        pygame.quit()

    @property
    def state(self) -> WindowState:
        return self._state

    def show_signed_in(self, user_name: str) -> None:
        self._state = WindowState.SIGNED_IN
        self._user_name = user_name
        self._notice = ""

    def show_signed_out(self, notice: str = "") -> None:
        self._state = WindowState.SIGNED_OUT
        self._notice = notice
        if self.dialog is not None:
            self.dialog.update(False, 0)

    def process_events(self) -> bool:
        """Process Pygame events.

        Returns:
            True if should continue running, False to quit.
        """
        return self.handle_events(pygame.event.get())

    def handle_events(self, events: list[pygame.event.Event]) -> bool:
        """Dispatch a batch of events.

        Args:
            events: Events for one frame.

        Returns:
            True if should continue running, False to quit.
        """
        for event in events:
            if event.type == pygame.QUIT:
                return False

            if self.on_input is not None:
                self.on_input(event)

            if self.dialog is not None and self.dialog.handle_event(event):
                continue

            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    return False
                if event.key == pygame.K_RETURN and self._state == WindowState.SIGNED_OUT:
                    if self.on_sign_in is not None:
                        self.on_sign_in()
        return True

    def render(self) -> None:
        """Render the current frame."""
        if self._screen is None or self._font is None or self._heading_font is None:
            return

        self._screen.fill(hex_to_rgb(self.theme.background))
        w, h = self.resolution

        if self._state == WindowState.SIGNED_IN:
            heading = f"Welcome back, {self._user_name}"
            hint = "Your session ends after a period of inactivity."
        else:
            heading = "Signed out"
            hint = "Press Enter to sign in."

        rendered = self._heading_font.render(heading, True, hex_to_rgb(self.theme.text))
        self._screen.blit(rendered, rendered.get_rect(center=(w // 2, h // 2 - 30)))
        rendered = self._font.render(hint, True, hex_to_rgb(self.theme.muted))
        self._screen.blit(rendered, rendered.get_rect(center=(w // 2, h // 2 + 10)))

        if self._notice:
            rendered = self._font.render(self._notice, True, hex_to_rgb(self.theme.destructive))
            self._screen.blit(rendered, rendered.get_rect(center=(w // 2, h // 2 + 50)))

        if self.dialog is not None:
            self.dialog.render(self._screen)

        pygame.display.flip()

    def tick(self) -> None:
        """Wait for next frame (maintain FPS)."""
        if self._clock is not None:
            self._clock.tick(self.fps)

    def run_frame(self) -> bool:
        """Run a single frame of the render loop.

        Returns:
            True if should continue, False to quit.
        """
        if not self.process_events():
            return False
        self.render()
        self.tick()
        return True

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "SessionWindow":
        """Create window from configuration.

        Args:
            config: The ``window`` section of the configuration file.

        Returns:
            Configured SessionWindow instance.
        """
        res = config.get("resolution", [800, 600])
        resolution: tuple[int, int] = (int(res[0]), int(res[1])) if res else (800, 600)
        return cls(
            resolution=resolution,
            fps=int(config.get("fps", 30)),
            title=str(config.get("title", "Back Office")),
            theme=Theme.from_dict(config.get("theme", {})),
        )
