"""
pendulab: damped pendulum simulation with an oscillation challenge.
"""

__version__ = "0.1.0"

from pendulab.config import SessionConfig, SimulationParameters, ChallengeConfig
from pendulab.core.session import PendulumSession
from pendulab.core.state import PendulumState, SessionSnapshot
from pendulab.game.evaluator import GamePhase

__all__ = [
    "__version__",
    "PendulumSession",
    "PendulumState",
    "SessionSnapshot",
    "SessionConfig",
    "SimulationParameters",
    "ChallengeConfig",
    "GamePhase",
]
