"""Activity detection from window input events."""

from typing import Protocol

import pygame

# Input events that count as user activity:
# pointer movement, key press, click, scroll, touch start.
ACTIVITY_EVENT_TYPES: frozenset[int] = frozenset(
    {
        pygame.MOUSEMOTION,
        pygame.KEYDOWN,
        pygame.MOUSEBUTTONDOWN,
        pygame.MOUSEWHEEL,
        pygame.FINGERDOWN,
    }
)


class ActivitySink(Protocol):
    """Anything that accepts activity signals."""

    def notify_activity(self) -> None:
        """Record one activity signal."""
        ...


class ActivityMonitor:
    """Forwards recognized input events to an activity sink."""

    def __init__(self, sink: ActivitySink) -> None:
        self._sink = sink

    def process_event(self, event: pygame.event.Event) -> bool:
        """Forward an event if it is user activity.

        Args:
            event: Pygame event from the window's queue.

        Returns:
            True if the event was recognized as activity.
        """
        if event.type not in ACTIVITY_EVENT_TYPES:
            return False
        self._sink.notify_activity()
        return True
