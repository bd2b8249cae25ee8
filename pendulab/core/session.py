"""Pendulum session orchestrator: commands, fixed-step loop and component pipeline."""

import math
from typing import Any, Dict, Mapping, Optional, Union

import numpy as np

from pendulab.config import ChallengeConfig, SessionConfig, SimulationParameters
from pendulab.core.history import TrajectoryHistory
from pendulab.core.state import PendulumState, SessionSnapshot
from pendulab.game.detector import OscillationDetector
from pendulab.game.evaluator import ChallengeEvaluator, GamePhase
from pendulab.game.token import FAILED_CODE, verification_code
from pendulab.logging_utils import get_logger
from pendulab.physics.pendulum import DampedPendulum, Energies, pendulum_energy
from pendulab.simulation.stepper import FixedStepper

logger = get_logger(__name__)

_MESSAGES = {
    GamePhase.NOT_STARTED: "Press Start",
    GamePhase.RUNNING: "Running...",
    GamePhase.PAUSED: "Paused",
}


class PendulumSession:
    """
    Single simulation session: owns parameters, pendulum state, stepper,
    oscillation detector, challenge evaluator and (optionally) a trajectory history.

    Per integration step: integrate -> advance time -> detector -> evaluator.
    Once the evaluator reports FINISHED the remaining steps of the frame are skipped.
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        history: Optional[TrajectoryHistory] = None,
        integrator: Optional[Any] = None,
    ) -> None:
        """
        Args:
            config: validated session configuration (default: SessionConfig()).
            history: per-step trajectory log (optional).
            integrator: fixed-step integrator for the pendulum (default: RK4).
        """
        self.config = config or SessionConfig()
        self.history = history
        self._integrator = integrator
        self.stepper = FixedStepper.from_config(self.config.stepper)
        self.detector = OscillationDetector.from_config(self.config.detector)
        self.evaluator = ChallengeEvaluator.from_config(self.config.challenge, self.config.evaluator)
        self._model = DampedPendulum.from_parameters(self.config.parameters, integrator=integrator)
        self._state = PendulumState.at_rest(self.config.parameters.initial_angle_rad)
        self._code = ""
        self.reset()

    # --- Configuration ---

    @property
    def parameters(self) -> SimulationParameters:
        return self.config.parameters

    @property
    def challenge(self) -> ChallengeConfig:
        return self.config.challenge

    def configure(
        self,
        parameters: Optional[Union[SimulationParameters, Mapping[str, Any]]] = None,
        challenge: Optional[Union[ChallengeConfig, Mapping[str, Any]]] = None,
    ) -> None:
        """
        Replace parameters and/or challenge settings, then reset.

        Mappings are validated (pydantic.ValidationError on bad values).
        Not allowed while a challenge is running or paused.
        """
        if self.phase in (GamePhase.RUNNING, GamePhase.PAUSED):
            raise RuntimeError("Parameters are read-only during a run: reset before configuring.")
        update: Dict[str, Any] = {}
        if parameters is not None:
            update["parameters"] = SimulationParameters.model_validate(parameters)
        if challenge is not None:
            update["challenge"] = ChallengeConfig.model_validate(challenge)
        if not update:
            return
        self.config = self.config.model_copy(update=update)
        self._model = DampedPendulum.from_parameters(self.config.parameters, integrator=self._integrator)
        self.evaluator = ChallengeEvaluator.from_config(self.config.challenge, self.config.evaluator)
        logger.info("configured: %s; %s", self.config.parameters, self.config.challenge)
        self.reset()

    # --- Commands ---

    def reset(self) -> None:
        """Back to the initial state: theta0 at rest, t = 0, counters cleared, NOT_STARTED."""
        theta0 = self.config.parameters.initial_angle_rad
        self._state = PendulumState.at_rest(theta0)
        self._model.initialize(t=0.0)
        self.stepper.reset()
        self.detector.initialize(theta=theta0)
        self.evaluator.reset()
        self._code = ""
        if self.history is not None:
            self.history.clear()
        logger.debug("session reset (theta0=%.4f rad)", theta0)

    def start(self) -> None:
        """Start the challenge; after a finished run the session is reset first."""
        if self.phase is GamePhase.FINISHED:
            self.reset()
        self.detector.initialize(theta=self._state.theta)
        self.stepper.reset()
        self.evaluator.start(self._state.t)
        self._code = ""
        logger.info(
            "challenge started at t=%.3f: %d oscillations within %.1fs",
            self._state.t, self.challenge.target_oscillations, self.challenge.time_limit_s,
        )

    def pause(self) -> None:
        self.evaluator.pause()
        logger.info("paused at t=%.3f", self._state.t)

    def resume(self) -> None:
        self.evaluator.resume()
        logger.info("resumed at t=%.3f", self._state.t)

    def toggle_pause(self) -> None:
        """Pause when running, resume when paused."""
        if self.phase is GamePhase.PAUSED:
            self.resume()
        else:
            self.pause()

    def impulse(self, delta_omega: Optional[float] = None) -> None:
        """Instantaneous kick: omega += delta_omega (default: config.impulse_rad_s)."""
        phase = self.phase
        if phase is GamePhase.FINISHED:
            raise RuntimeError("Cannot apply an impulse to a finished run: reset first.")
        if phase in (GamePhase.RUNNING, GamePhase.PAUSED) and not self.config.allow_impulse_while_running:
            raise RuntimeError("Impulses are disabled during a challenge.")
        delta = self.config.impulse_rad_s if delta_omega is None else float(delta_omega)
        if not math.isfinite(delta):
            raise ValueError(f"impulse must be finite, got {delta}")
        self._state.omega += delta
        logger.info("impulse %+.3f rad/s at t=%.3f", delta, self._state.t)

    # --- Time loop ---

    def advance(self, frame_dt: float) -> int:
        """
        Feed one frame of wall-clock time. Steps only while RUNNING.

        Returns:
            Number of integration steps executed.
        """
        if self.phase is not GamePhase.RUNNING:
            return 0
        return self.stepper.advance(frame_dt, self._step_once)

    def _step_once(self, h: float) -> bool:
        s = self._state
        # 1) Physics (the model clock is the session clock)
        phys_out = self._model.step(state=np.array([s.theta, s.omega]), dt=h)
        s.theta, s.omega = float(phys_out["state"][0]), float(phys_out["state"][1])
        s.t = phys_out["t"]

        # 2) Oscillation detection
        det_out = self.detector.step(theta=s.theta, omega=s.omega, t=s.t, dt=h)

        # 3) Challenge evaluation
        energy = self.energy().total
        eval_out = self.evaluator.step(
            theta=s.theta,
            omega=s.omega,
            t=s.t,
            dt=h,
            oscillation_delta=det_out["oscillation_delta"],
            energy=energy,
        )

        if self.history is not None:
            self.history.append(
                time=s.t,
                theta=s.theta,
                omega=s.omega,
                energy=energy,
                oscillations=self.evaluator.oscillations,
            )

        if eval_out["finished"]:
            self._on_finish()
            return False
        return True

    def _on_finish(self) -> None:
        if self.evaluator.success:
            p = self.config.parameters
            self._code = verification_code(
                p.length_m, p.initial_angle_deg, p.damping, self.evaluator.elapsed, self.evaluator.oscillations,
            )
        else:
            self._code = FAILED_CODE

    # --- Outputs ---

    def energy(self) -> Energies:
        p = self.config.parameters
        return pendulum_energy(self._state.theta, self._state.omega, p.mass_kg, p.gravity, p.length_m)

    def message(self) -> str:
        phase = self.phase
        if phase is not GamePhase.FINISHED:
            return _MESSAGES[phase]
        if self.evaluator.success:
            return "Success! Target reached."
        return f"Target not reached ({self.evaluator.reason.value.replace('_', ' ')})."

    def snapshot(self) -> SessionSnapshot:
        s = self._state
        reason = self.evaluator.reason
        return SessionSnapshot(
            t=s.t,
            theta_deg=s.theta_deg,
            omega=s.omega,
            oscillations=self.evaluator.oscillations,
            phase=self.phase.value,
            energy=self.energy().total,
            elapsed=self.evaluator.elapsed,
            success=self.evaluator.success,
            reason=reason.value if reason else None,
            message=self.message(),
            code=self._code,
        )

    @property
    def state(self) -> PendulumState:
        """Copy of the current pendulum state."""
        return PendulumState(theta=self._state.theta, omega=self._state.omega, t=self._state.t)

    @property
    def phase(self) -> GamePhase:
        return self.evaluator.phase

    @property
    def time(self) -> float:
        """Current simulated time."""
        return self._state.t

    @property
    def code(self) -> str:
        """Verification code of the finished run ('' while not finished)."""
        return self._code

    def state_dict(self) -> Dict[str, Any]:
        """Full session state, for debugging and snapshots."""
        return {
            "theta": self._state.theta,
            "omega": self._state.omega,
            "time": self._state.t,
            "accumulator": self.stepper.accumulator,
            "physics": self._model.state_dict(),
            "detector": self.detector.state_dict(),
            "evaluator": self.evaluator.state_dict(),
            "code": self._code,
        }
