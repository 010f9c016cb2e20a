"""Pygame presentation layer."""

from idleguard.ui.theme import Theme
from idleguard.ui.warning_dialog import InactivityWarningDialog
from idleguard.ui.window import SessionWindow, WindowState

__all__ = ["InactivityWarningDialog", "SessionWindow", "Theme", "WindowState"]
