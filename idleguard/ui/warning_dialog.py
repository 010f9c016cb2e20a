"""Modal warning shown before an inactivity logout."""

from collections.abc import Callable

import pygame

from idleguard.ui.theme import Theme, hex_to_rgb


def format_countdown_message(seconds: int) -> str:
    """Build the dialog body text.

    Args:
        seconds: Seconds until logout.

    Returns:
        Message with the correct plural form.
    """
    unit = "second" if seconds == 1 else "seconds"
    return f"You will be automatically logged out in {seconds} {unit} due to inactivity."


def _wrap(font: pygame.font.Font, text: str, max_width: int) -> list[str]:
    """Split text into lines that fit the panel width."""
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}".strip()
        if current and font.size(candidate)[0] > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


class InactivityWarningDialog:
    """Countdown modal with a single "Stay Logged In" action.

    While open the dialog swallows every input event, so Escape and clicks
    outside the panel cannot dismiss it.
    """

    TITLE = "Session Expiring Soon"
    BUTTON_LABEL = "Stay Logged In"
    CONFIRM_KEYS = frozenset({pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE})

    def __init__(
        self,
        size: tuple[int, int],
        on_stay_logged_in: Callable[[], None],
        theme: Theme | None = None,
    ) -> None:
        """Initialize the dialog.

        Args:
            size: Window size (width, height) the dialog is centered in.
            on_stay_logged_in: Called when the user confirms; should reset the timer.
            theme: Colors. Defaults to the built-in theme.
        """
        self.size = size
        self.theme = theme or Theme()
        self._on_stay_logged_in = on_stay_logged_in
        self._open = False
        self._seconds_remaining = 0
        self._title_font: pygame.font.Font | None = None
        self._body_font: pygame.font.Font | None = None

        self._calculate_layout()

    def _calculate_layout(self) -> None:
        """Calculate panel and button positions based on size."""
        w, h = self.size
        panel_w = min(w - 40, 520)
        panel_h = min(h - 40, 220)
        self.panel_rect = pygame.Rect((w - panel_w) // 2, (h - panel_h) // 2, panel_w, panel_h)

        button_w, button_h = 180, 44
        self.button_rect = pygame.Rect(
            self.panel_rect.right - button_w - 24,
            self.panel_rect.bottom - button_h - 20,
            button_w,
            button_h,
        )

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def seconds_remaining(self) -> int:
        return self._seconds_remaining

    @property
    def message(self) -> str:
        return format_countdown_message(self._seconds_remaining)

    def update(self, warning_visible: bool, seconds_remaining: int) -> None:
        """Sync the dialog with the timer state.

        Args:
            warning_visible: Whether the dialog should be shown.
            seconds_remaining: Countdown value to display.
        """
        self._open = warning_visible
        self._seconds_remaining = max(0, seconds_remaining)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Process an input event while the dialog is open.

        Args:
            event: Pygame event.

        Returns:
            True if the dialog consumed the event.
        """
        if not self._open:
            return False

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.button_rect.collidepoint(event.pos):
                self._confirm()
        elif event.type == pygame.KEYDOWN and event.key in self.CONFIRM_KEYS:
            self._confirm()
        return True

    def _confirm(self) -> None:
        self._open = False
        self._on_stay_logged_in()

    def render(self, surface: pygame.Surface) -> None:
        """Draw the dialog over the current frame."""
        if not self._open:
            return
        self._ensure_fonts()
        if self._title_font is None or self._body_font is None:
            return

        # Dim the page behind the modal
        overlay = pygame.Surface(self.size, pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 150))
        surface.blit(overlay, (0, 0))

        pygame.draw.rect(surface, hex_to_rgb(self.theme.panel), self.panel_rect, border_radius=8)

        # Warning badge
        badge_center = (self.panel_rect.left + 40, self.panel_rect.top + 42)
        pygame.draw.circle(surface, hex_to_rgb(self.theme.destructive), badge_center, 16)
        mark = self._title_font.render("!", True, hex_to_rgb(self.theme.panel))
        surface.blit(mark, mark.get_rect(center=badge_center))

        title = self._title_font.render(self.TITLE, True, hex_to_rgb(self.theme.text))
        surface.blit(title, (self.panel_rect.left + 68, self.panel_rect.top + 28))

        body_y = self.panel_rect.top + 84
        for line in _wrap(self._body_font, self.message, self.panel_rect.width - 48):
            rendered = self._body_font.render(line, True, hex_to_rgb(self.theme.text))
            surface.blit(rendered, (self.panel_rect.left + 24, body_y))
            body_y += rendered.get_height() + 4

        pygame.draw.rect(
            surface, hex_to_rgb(self.theme.primary), self.button_rect, border_radius=6
        )
        label = self._body_font.render(self.BUTTON_LABEL, True, hex_to_rgb(self.theme.panel))
        surface.blit(label, label.get_rect(center=self.button_rect.center))

    def _ensure_fonts(self) -> None:
        if self._title_font is None:
            pygame.font.init()
            self._title_font = pygame.font.Font(None, 34)
            self._body_font = pygame.font.Font(None, 26)
