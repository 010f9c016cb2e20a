"""Tests for the window and warning dialog."""

from unittest.mock import MagicMock

import pygame

from idleguard.ui.theme import Theme, hex_to_rgb
from idleguard.ui.warning_dialog import (
    InactivityWarningDialog,
    _wrap,
    format_countdown_message,
)
from idleguard.ui.window import SessionWindow, WindowState


def _click(pos: tuple[int, int]) -> pygame.event.Event:
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, {"pos": pos, "button": 1})


def _key(key: int) -> pygame.event.Event:
    return pygame.event.Event(pygame.KEYDOWN, {"key": key, "mod": 0, "unicode": ""})


class TestTheme:
    """Tests for Theme."""

    def test_hex_to_rgb(self):
        """Test hex color conversion."""
        assert hex_to_rgb("#2563EB") == (37, 99, 235)
        assert hex_to_rgb("FFFFFF") == (255, 255, 255)

    def test_from_dict(self):
        """Test creating from dictionary."""
        theme = Theme.from_dict({"primary": "#000000"})
        assert theme.primary == "#000000"
        # Should use defaults for missing
        assert theme.destructive == "#DC2626"


class TestCountdownMessage:
    """Tests for the dialog body text."""

    def test_plural(self):
        """Test plural seconds."""
        assert format_countdown_message(60) == (
            "You will be automatically logged out in 60 seconds due to inactivity."
        )

    def test_singular(self):
        """Test a single second."""
        assert "in 1 second due" in format_countdown_message(1)

    def test_zero(self):
        """Test zero uses the plural form."""
        assert "in 0 seconds due" in format_countdown_message(0)


class TestInactivityWarningDialog:
    """Tests for InactivityWarningDialog."""

    def _dialog(self) -> tuple[InactivityWarningDialog, MagicMock]:
        on_stay = MagicMock()
        return InactivityWarningDialog((800, 600), on_stay_logged_in=on_stay), on_stay

    def test_closed_by_default(self):
        """Test initial state."""
        dialog, _ = self._dialog()
        assert not dialog.is_open

    def test_update(self):
        """Test syncing with timer state."""
        dialog, _ = self._dialog()
        dialog.update(True, 42)
        assert dialog.is_open
        assert dialog.seconds_remaining == 42
        assert "42 seconds" in dialog.message

    def test_update_clamps_negative(self):
        """Test that the displayed countdown never goes below zero."""
        dialog, _ = self._dialog()
        dialog.update(True, -3)
        assert dialog.seconds_remaining == 0

    def test_closed_dialog_ignores_events(self):
        """Test that a closed dialog consumes nothing."""
        dialog, on_stay = self._dialog()
        assert not dialog.handle_event(_click(dialog.button_rect.center))
        on_stay.assert_not_called()

    def test_button_click_stays_logged_in(self):
        """Test the single action."""
        dialog, on_stay = self._dialog()
        dialog.update(True, 30)
        assert dialog.handle_event(_click(dialog.button_rect.center))
        on_stay.assert_called_once()
        assert not dialog.is_open

    def test_enter_key_stays_logged_in(self):
        """Test keyboard confirmation."""
        dialog, on_stay = self._dialog()
        dialog.update(True, 30)
        assert dialog.handle_event(_key(pygame.K_RETURN))
        on_stay.assert_called_once()

    def test_outside_click_is_swallowed(self):
        """Test that clicking outside does not dismiss the dialog."""
        dialog, on_stay = self._dialog()
        dialog.update(True, 30)
        assert dialog.handle_event(_click((1, 1)))
        on_stay.assert_not_called()
        assert dialog.is_open

    def test_escape_is_swallowed(self):
        """Test that Escape does not dismiss the dialog."""
        dialog, on_stay = self._dialog()
        dialog.update(True, 30)
        assert dialog.handle_event(_key(pygame.K_ESCAPE))
        on_stay.assert_not_called()
        assert dialog.is_open

    def test_layout_centered(self):
        """Test that the panel is centered and holds the button."""
        dialog, _ = self._dialog()
        assert dialog.panel_rect.center == (400, 300)
        assert dialog.panel_rect.contains(dialog.button_rect)

    def test_render(self, init_pygame):
        """Test rendering onto a surface."""
        dialog, _ = self._dialog()
        surface = pygame.Surface((800, 600))
        surface.fill((255, 255, 255))
        dialog.update(True, 12)
        dialog.render(surface)
        # Overlay dims the corners
        assert surface.get_at((1, 1))[:3] != (255, 255, 255)

    def test_render_narrow_window(self, init_pygame):
        """Test that the message wraps inside a small panel."""
        dialog = InactivityWarningDialog((240, 200), on_stay_logged_in=MagicMock())
        surface = pygame.Surface((240, 200))
        dialog.update(True, 5)
        dialog.render(surface)

        font = pygame.font.Font(None, 26)
        lines = _wrap(font, dialog.message, dialog.panel_rect.width - 48)
        assert len(lines) > 1
        assert " ".join(lines) == dialog.message

    def test_render_closed_draws_nothing(self, init_pygame):
        """Test that a closed dialog leaves the frame untouched."""
        dialog, _ = self._dialog()
        surface = pygame.Surface((800, 600))
        surface.fill((255, 255, 255))
        dialog.render(surface)
        assert surface.get_at((400, 300))[:3] == (255, 255, 255)


class TestSessionWindow:
    """Tests for SessionWindow."""

    def test_default_values(self):
        """Test default configuration values."""
        window = SessionWindow()
        assert window.resolution == (800, 600)
        assert window.fps == 30
        assert window.state == WindowState.SIGNED_OUT

    def test_from_config(self):
        """Test creating from configuration."""
        window = SessionWindow.from_config(
            {"resolution": [1280, 720], "fps": 24, "title": "Owner Portal"}
        )
        assert window.resolution == (1280, 720)
        assert window.fps == 24
        assert window.title == "Owner Portal"

    def test_quit_event(self):
        """Test that closing the window stops the loop."""
        window = SessionWindow()
        assert not window.handle_events([pygame.event.Event(pygame.QUIT)])

    def test_escape_quits_without_dialog(self):
        """Test Escape quits when no modal is shown."""
        window = SessionWindow()
        assert not window.handle_events([_key(pygame.K_ESCAPE)])

    def test_escape_swallowed_by_open_dialog(self):
        """Test Escape does not quit while the warning is open."""
        window = SessionWindow()
        window.dialog = InactivityWarningDialog(window.resolution, on_stay_logged_in=MagicMock())
        window.dialog.update(True, 10)
        assert window.handle_events([_key(pygame.K_ESCAPE)])

    def test_input_seen_before_dialog(self):
        """Test that activity listeners see events the dialog consumes."""
        window = SessionWindow()
        window.dialog = InactivityWarningDialog(window.resolution, on_stay_logged_in=MagicMock())
        window.dialog.update(True, 10)
        on_input = MagicMock()
        window.on_input = on_input

        event = _click((1, 1))
        window.handle_events([event])

        on_input.assert_called_once_with(event)

    def test_enter_signs_in_when_signed_out(self):
        """Test the sign-in shortcut."""
        window = SessionWindow()
        on_sign_in = MagicMock()
        window.on_sign_in = on_sign_in
        window.handle_events([_key(pygame.K_RETURN)])
        on_sign_in.assert_called_once()

    def test_enter_ignored_when_signed_in(self):
        """Test that Enter does nothing in the signed-in view."""
        window = SessionWindow()
        on_sign_in = MagicMock()
        window.on_sign_in = on_sign_in
        window.show_signed_in("Dana")
        window.handle_events([_key(pygame.K_RETURN)])
        on_sign_in.assert_not_called()

    def test_show_signed_out_closes_dialog(self):
        """Test that leaving the session hides the warning."""
        window = SessionWindow()
        window.dialog = InactivityWarningDialog(window.resolution, on_stay_logged_in=MagicMock())
        window.dialog.update(True, 10)
        window.show_signed_out("Logged out")
        assert window.state == WindowState.SIGNED_OUT
        assert not window.dialog.is_open

    def test_run_frame_headless(self):
        """Test a full frame on the dummy video driver."""
        window = SessionWindow(resolution=(320, 240))
        window.initialize()
        try:
            window.show_signed_in("Dana")
            assert window.run_frame()
        finally:
            window.shutdown()
