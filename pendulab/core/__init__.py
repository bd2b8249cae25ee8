"""Core: session orchestrator, state and component interface."""

from pendulab.core.component import SessionComponent
from pendulab.core.state import PendulumState, SessionSnapshot
from pendulab.core.history import TrajectoryHistory
from pendulab.core.session import PendulumSession

__all__ = [
    "SessionComponent",
    "PendulumState",
    "SessionSnapshot",
    "TrajectoryHistory",
    "PendulumSession",
]
