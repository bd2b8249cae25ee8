"""Challenge state machine: decides when a run succeeds or fails."""

import enum
from typing import Any, Dict, Optional

from pendulab.core.component import SessionComponent
from pendulab.logging_utils import get_logger

logger = get_logger(__name__)


class GamePhase(str, enum.Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


class FinishReason(str, enum.Enum):
    TARGET_REACHED = "target_reached"
    TIME_LIMIT = "time_limit"
    ENERGY_DEPLETED = "energy_depleted"
    STALLED = "stalled"
    SAFETY_TIMEOUT = "safety_timeout"


class ChallengeEvaluator(SessionComponent):
    """
    NOT_STARTED -> RUNNING <-> PAUSED -> FINISHED(success | failure).

    Each step consumes the detector's oscillation increment and the current
    total energy. Success (target count reached within the time limit) is
    checked before the failure rules when `success_first` is set:
      - challenge time above the time limit;
      - energy below `energy_epsilon` after `energy_grace_s` of challenge time;
      - optional stall: |omega| < stall_speed and |theta| < stall_angle after the grace period;
      - simulated time above `safety_timeout_s`.
    FINISHED is terminal until reset(). Outcomes are reported, never raised.
    """

    def __init__(
        self,
        target_oscillations: int = 5,
        time_limit: float = 60.0,
        energy_epsilon: float = 1e-3,
        energy_grace: float = 1.0,
        safety_timeout: float = 120.0,
        success_first: bool = True,
        stall_speed: Optional[float] = None,
        stall_angle: float = 0.10,
    ) -> None:
        self.target_oscillations = int(target_oscillations)
        self.time_limit = float(time_limit)
        self.energy_epsilon = float(energy_epsilon)
        self.energy_grace = float(energy_grace)
        self.safety_timeout = float(safety_timeout)
        self.success_first = success_first
        self.stall_speed = stall_speed
        self.stall_angle = float(stall_angle)
        self._phase = GamePhase.NOT_STARTED
        self._start_time: float = 0.0
        self._elapsed: float = 0.0
        self._oscillations: int = 0
        self._success: Optional[bool] = None
        self._reason: Optional[FinishReason] = None

    @classmethod
    def from_config(cls, challenge: Any, policy: Any) -> "ChallengeEvaluator":
        return cls(
            target_oscillations=challenge.target_oscillations,
            time_limit=challenge.time_limit_s,
            energy_epsilon=policy.energy_epsilon,
            energy_grace=policy.energy_grace_s,
            safety_timeout=policy.safety_timeout_s,
            success_first=policy.success_first,
            stall_speed=policy.stall_speed_rad_s,
            stall_angle=policy.stall_angle_rad,
        )

    # --- Commands ---

    def initialize(self, **kwargs: Any) -> None:
        self.reset()

    def reset(self) -> None:
        """Back to NOT_STARTED from any phase."""
        self._phase = GamePhase.NOT_STARTED
        self._start_time = 0.0
        self._elapsed = 0.0
        self._oscillations = 0
        self._success = None
        self._reason = None

    def start(self, t: float) -> None:
        """NOT_STARTED/FINISHED -> RUNNING; counters reset, challenge clock starts at t."""
        if self._phase not in (GamePhase.NOT_STARTED, GamePhase.FINISHED):
            raise RuntimeError(f"Cannot start a challenge in phase {self._phase.value!r}.")
        self.reset()
        self._phase = GamePhase.RUNNING
        self._start_time = float(t)

    def pause(self) -> None:
        if self._phase is not GamePhase.RUNNING:
            raise RuntimeError(f"Cannot pause in phase {self._phase.value!r}.")
        self._phase = GamePhase.PAUSED

    def resume(self) -> None:
        if self._phase is not GamePhase.PAUSED:
            raise RuntimeError(f"Cannot resume in phase {self._phase.value!r}.")
        self._phase = GamePhase.RUNNING

    # --- Evaluation ---

    def _check_success(self) -> Optional[FinishReason]:
        if self._oscillations >= self.target_oscillations and self._elapsed <= self.time_limit:
            return FinishReason.TARGET_REACHED
        return None

    def _check_failure(self, theta: float, omega: float, t: float, energy: float) -> Optional[FinishReason]:
        if self._elapsed > self.time_limit:
            return FinishReason.TIME_LIMIT
        past_grace = self._elapsed > self.energy_grace
        if past_grace and energy < self.energy_epsilon:
            return FinishReason.ENERGY_DEPLETED
        if (
            past_grace
            and self.stall_speed is not None
            and abs(omega) < self.stall_speed
            and abs(theta) < self.stall_angle
        ):
            return FinishReason.STALLED
        if t > self.safety_timeout:
            return FinishReason.SAFETY_TIMEOUT
        return None

    def step(
        self,
        *,
        theta: float,
        omega: float,
        t: float,
        dt: float,
        oscillation_delta: int = 0,
        energy: float = float("inf"),
        **kwargs: Any,
    ) -> Dict[str, Any]:
        """
        Evaluate termination after one integration step.
        Only acts while RUNNING; in any other phase the step is ignored.
        """
        if self._phase is GamePhase.RUNNING:
            self._oscillations += int(oscillation_delta)
            self._elapsed = t - self._start_time
            if self.success_first:
                reason = self._check_success() or self._check_failure(theta, omega, t, energy)
            else:
                reason = self._check_failure(theta, omega, t, energy) or self._check_success()
            if reason is not None:
                self._finish(reason, t)
        return {
            "phase": self._phase,
            "finished": self._phase is GamePhase.FINISHED,
            "success": self._success,
            "reason": self._reason,
        }

    def _finish(self, reason: FinishReason, t: float) -> None:
        self._phase = GamePhase.FINISHED
        self._success = reason is FinishReason.TARGET_REACHED
        self._reason = reason
        logger.info(
            "challenge finished: %s (success=%s, oscillations=%d/%d, elapsed=%.2fs, t=%.2fs)",
            reason.value, self._success, self._oscillations, self.target_oscillations, self._elapsed, t,
        )

    # --- Accessors ---

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def oscillations(self) -> int:
        return self._oscillations

    @property
    def elapsed(self) -> float:
        """Challenge time at the last evaluated step."""
        return self._elapsed

    @property
    def start_time(self) -> float:
        return self._start_time

    @property
    def success(self) -> Optional[bool]:
        return self._success

    @property
    def reason(self) -> Optional[FinishReason]:
        return self._reason

    def state_dict(self) -> Dict[str, Any]:
        return {
            "phase": self._phase.value,
            "start_time": self._start_time,
            "elapsed": self._elapsed,
            "oscillations": self._oscillations,
            "target_oscillations": self.target_oscillations,
            "time_limit": self.time_limit,
            "success": self._success,
            "reason": self._reason.value if self._reason else None,
        }
