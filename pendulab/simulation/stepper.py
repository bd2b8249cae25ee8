"""
Fixed-step accumulator: irregular frame durations -> whole integration steps.

Simulated time advances only in multiples of the step size, so the trajectory
does not depend on the display refresh pattern, only on total elapsed time.
"""

from typing import Any, Callable, Optional

# Absorbs the rounding of dt sums, so one frame of 3h drains as three steps.
_EPS = 1e-9


class FixedStepper:
    """
    Accumulates frame time and drains it in fixed steps.

    Each frame duration is capped at `max_frame` before it is added; time above
    the cap is dropped, not carried over as debt.
    """

    def __init__(self, step_size: float = 0.016, max_frame: float = 0.05) -> None:
        """
        Args:
            step_size: fixed integration step h (s).
            max_frame: cap on a single frame duration (s).
        """
        if step_size <= 0:
            raise ValueError("step_size must be > 0")
        if max_frame < step_size:
            raise ValueError("max_frame must be >= step_size")
        self.step_size = float(step_size)
        self.max_frame = float(max_frame)
        self._accumulator: float = 0.0

    @classmethod
    def from_config(cls, config: Any) -> "FixedStepper":
        return cls(step_size=config.step_size_s, max_frame=config.max_frame_s)

    @property
    def accumulator(self) -> float:
        return self._accumulator

    def reset(self) -> None:
        self._accumulator = 0.0

    def advance(self, frame_dt: float, step_fn: Callable[[float], Optional[bool]]) -> int:
        """
        Add one frame of wall-clock time and run as many whole steps as it covers.

        Args:
            frame_dt: frame duration (s), >= 0.
            step_fn: called once per step with the step size; returning False
                stops draining for this frame and discards the remaining time.

        Returns:
            Number of steps executed.
        """
        if frame_dt < 0:
            raise ValueError(f"frame duration must be >= 0, got {frame_dt}")
        self._accumulator += min(float(frame_dt), self.max_frame)
        n_steps = 0
        h = self.step_size
        while self._accumulator + _EPS >= h:
            self._accumulator = max(self._accumulator - h, 0.0)
            n_steps += 1
            if step_fn(h) is False:
                self._accumulator = 0.0
                break
        return n_steps
