"""Debounced zero-crossing detector: continuous angle -> discrete oscillation events."""

import math
from typing import Any, Dict, Optional

import numpy as np

from pendulab.core.component import SessionComponent
from pendulab.logging_utils import get_logger

logger = get_logger(__name__)


class OscillationDetector(SessionComponent):
    """
    Counts sign changes of theta through the center.

    A sign change is accepted as a half-crossing only if |theta| is below
    `center_threshold` and more than `debounce` seconds have passed since the
    previous accepted crossing. Every second accepted half-crossing is one full
    oscillation (outward swing + return). theta == 0 is ignored.

    The detector does not share its counters: each step returns the increment
    ("oscillation_delta") for downstream consumers.
    """

    def __init__(
        self,
        center_threshold: float = 0.12,
        debounce: float = 0.1,
        track_sign_on_reject: bool = True,
    ) -> None:
        """
        Args:
            center_threshold: max |theta| (rad) for an accepted crossing.
            debounce: min time (s) between accepted crossings.
            track_sign_on_reject: update the last sign even when a crossing is
                rejected by the gates. With False a single rejected crossing can
                block detection until the angle comes back to the old side.
        """
        self.center_threshold = float(center_threshold)
        self.debounce = float(debounce)
        self.track_sign_on_reject = track_sign_on_reject
        self._last_sign: int = 0
        self._last_cross_time: float = -math.inf
        self._half_crossings: int = 0
        self._oscillations: int = 0

    @classmethod
    def from_config(cls, config: Any) -> "OscillationDetector":
        return cls(
            center_threshold=config.center_threshold_rad,
            debounce=config.debounce_s,
            track_sign_on_reject=config.track_sign_on_reject,
        )

    def initialize(self, **kwargs: Any) -> None:
        """Reset counters; `theta` (initial angle) seeds the last sign."""
        theta0 = kwargs.get("theta", 0.0)
        self._last_sign = int(np.sign(theta0))
        self._last_cross_time = -math.inf
        self._half_crossings = 0
        self._oscillations = 0

    def update(self, theta: float, t: float) -> Dict[str, Any]:
        """Observe the angle at simulated time t."""
        sign = int(np.sign(theta))
        if sign == 0 or sign == self._last_sign:
            return {"crossing": False, "oscillation_delta": 0}

        accepted = abs(theta) < self.center_threshold and (t - self._last_cross_time) > self.debounce
        delta = 0
        if accepted:
            self._last_cross_time = t
            self._half_crossings += 1
            if self._half_crossings % 2 == 0:
                self._oscillations += 1
                delta = 1
            logger.debug(
                "crossing accepted at t=%.3f theta=%.4f (half=%d, full=%d)",
                t, theta, self._half_crossings, self._oscillations,
            )
        if accepted or self.track_sign_on_reject:
            self._last_sign = sign
        return {"crossing": accepted, "oscillation_delta": delta}

    def step(
        self,
        *,
        theta: float,
        omega: float,
        t: float,
        dt: float,
        **kwargs: Any,
    ) -> Dict[str, Any]:
        return self.update(theta, t)

    @property
    def last_sign(self) -> int:
        return self._last_sign

    @property
    def last_cross_time(self) -> Optional[float]:
        return None if math.isinf(self._last_cross_time) else self._last_cross_time

    @property
    def half_crossings(self) -> int:
        return self._half_crossings

    @property
    def oscillations(self) -> int:
        return self._oscillations

    def state_dict(self) -> Dict[str, Any]:
        return {
            "last_sign": self._last_sign,
            "last_cross_time": self.last_cross_time,
            "half_crossings": self._half_crossings,
            "oscillations": self._oscillations,
        }
