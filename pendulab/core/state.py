"""Pendulum state and the per-frame snapshot handed to the UI layer."""

import math
from dataclasses import dataclass
from typing import Optional


@dataclass
class PendulumState:
    """
    Mutable dynamic state, advanced one fixed step at a time.

    theta is not wrapped to [-pi, pi]; t only grows, in multiples of the step size.
    """

    theta: float
    omega: float = 0.0
    t: float = 0.0

    @classmethod
    def at_rest(cls, theta0: float) -> "PendulumState":
        return cls(theta=float(theta0), omega=0.0, t=0.0)

    @property
    def theta_deg(self) -> float:
        return math.degrees(self.theta)


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session, refreshed once per frame."""

    t: float
    theta_deg: float
    omega: float
    oscillations: int
    phase: str
    energy: float
    elapsed: float = 0.0
    success: Optional[bool] = None
    reason: Optional[str] = None
    message: str = ""
    code: str = ""

    @property
    def finished(self) -> bool:
        return self.success is not None
