"""
Typed session configuration, validated with pydantic.

Every externally supplied value (UI sliders, config files) passes through these
models before it reaches the integrator, detector or evaluator. Invalid values
raise pydantic.ValidationError (a ValueError) at this boundary; the core never
clamps or repairs them.

Example config file (session.json)
{
  "parameters": {"length_m": 1.0, "initial_angle_deg": 45, "damping": 0.05, "gravity": 9.8},
  "challenge": {"target_oscillations": 5, "time_limit_s": 60},
  "stepper": {"step_size_s": 0.016, "max_frame_s": 0.05}
}
"""

import math
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from pendulab.io.serializers import load_config, save_config


class SimulationParameters(BaseModel):
    """Physical parameters; read-only while a challenge is running."""

    model_config = ConfigDict(frozen=True)

    length_m: float = Field(1.0, gt=0.0, description="Rod length L (m).")
    initial_angle_deg: float = Field(30.0, description="Release angle from vertical (degrees).")
    damping: float = Field(0.0, ge=0.0, description="Damping coefficient b (1/s).")
    gravity: float = Field(9.8, gt=0.0, description="Gravitational acceleration g (m/s^2).")
    mass_kg: float = Field(1.0, gt=0.0, description="Bob mass m (kg); only scales energy.")

    @field_validator("length_m", "initial_angle_deg", "damping", "gravity", "mass_kg")
    @classmethod
    def _finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("value must be finite")
        return value

    @property
    def initial_angle_rad(self) -> float:
        return math.radians(self.initial_angle_deg)


class ChallengeConfig(BaseModel):
    """Goal of the challenge: N full oscillations within a time limit."""

    model_config = ConfigDict(frozen=True)

    target_oscillations: int = Field(5, gt=0)
    time_limit_s: float = Field(60.0, gt=0.0)


class StepperConfig(BaseModel):
    """Fixed integration step and per-frame cap for the accumulator."""

    model_config = ConfigDict(frozen=True)

    step_size_s: float = Field(0.016, gt=0.0, le=0.1)
    max_frame_s: float = Field(0.05, gt=0.0)

    @model_validator(mode="after")
    def _frame_cap_covers_step(self) -> "StepperConfig":
        if self.max_frame_s < self.step_size_s:
            raise ValueError("max_frame_s must be >= step_size_s, otherwise no step is ever taken")
        return self


class DetectorConfig(BaseModel):
    """Gates applied to sign changes of the angle."""

    model_config = ConfigDict(frozen=True)

    center_threshold_rad: float = Field(0.12, gt=0.0)
    debounce_s: float = Field(0.1, ge=0.0)
    # Rejected crossings still update the last seen sign.
    track_sign_on_reject: bool = True


class EvaluatorPolicy(BaseModel):
    """Termination rules for a running challenge."""

    model_config = ConfigDict(frozen=True)

    energy_epsilon: float = Field(1e-3, ge=0.0)
    energy_grace_s: float = Field(1.0, ge=0.0)
    safety_timeout_s: float = Field(120.0, gt=0.0)
    success_first: bool = True
    # Optional stall rule: |omega| below this and |theta| below stall_angle_rad.
    stall_speed_rad_s: Optional[float] = Field(None, gt=0.0)
    stall_angle_rad: float = Field(0.10, gt=0.0)


class SessionConfig(BaseModel):
    """Full configuration of a pendulum session."""

    model_config = ConfigDict(frozen=True)

    parameters: SimulationParameters = Field(default_factory=SimulationParameters)
    challenge: ChallengeConfig = Field(default_factory=ChallengeConfig)
    stepper: StepperConfig = Field(default_factory=StepperConfig)
    detector: DetectorConfig = Field(default_factory=DetectorConfig)
    evaluator: EvaluatorPolicy = Field(default_factory=EvaluatorPolicy)
    impulse_rad_s: float = 0.8
    allow_impulse_while_running: bool = True

    @field_validator("impulse_rad_s")
    @classmethod
    def _finite_impulse(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("impulse_rad_s must be finite")
        return value


def load_session_config(path: Union[str, Path]) -> SessionConfig:
    """Load and validate a SessionConfig from a JSON file."""
    return SessionConfig.model_validate(load_config(path))


def save_session_config(config: SessionConfig, path: Union[str, Path]) -> None:
    """Write a SessionConfig to JSON."""
    save_config(config.model_dump(), path)
