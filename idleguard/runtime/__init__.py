"""Application runtime."""

from idleguard.runtime.controller import RuntimeController, RuntimeState

__all__ = ["RuntimeController", "RuntimeState"]
