"""Inactivity tracking for a signed-in session."""

from idleguard.session.activity import ACTIVITY_EVENT_TYPES, ActivityMonitor
from idleguard.session.config import InactivityConfig
from idleguard.session.scheduler import Scheduler, ThreadingScheduler
from idleguard.session.timer import InactivitySessionTimer, SessionActivityState

__all__ = [
    "ACTIVITY_EVENT_TYPES",
    "ActivityMonitor",
    "InactivityConfig",
    "InactivitySessionTimer",
    "Scheduler",
    "SessionActivityState",
    "ThreadingScheduler",
]
