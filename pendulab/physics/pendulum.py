"""
Damped simple pendulum: model, single RK4 step and mechanical energy.

Equation of motion (second order):
    theta'' = -(g / L) * sin(theta) - b * omega
written as the first order system on x = [theta, omega]:
    theta' = omega
    omega' = -(g / L) * sin(theta) - b * omega

The mass cancels out of the angle equation; it only scales the energy.
The angle is never wrapped to [-pi, pi].
"""

from typing import Any, NamedTuple, Optional, Tuple

import numpy as np

from pendulab.physics.integrators import RK4Integrator
from pendulab.physics.ode import ODEModel

_NO_INPUT = np.zeros(0)


class Energies(NamedTuple):
    """Kinetic, potential and total mechanical energy (J)."""

    kinetic: float
    potential: float
    total: float


class DampedPendulum(ODEModel):
    """
    Planar pendulum with linear (viscous) damping.
    State [theta, omega] in rad, rad/s; no external input.

    `length` must be > 0. This is checked at the configuration boundary
    (see pendulab.config.SimulationParameters); the model does not clamp it,
    so L = 0 fails with ZeroDivisionError in rhs().
    """

    def __init__(
        self,
        length: float = 1.0,
        gravity: float = 9.8,
        damping: float = 0.0,
        integrator: Optional[Any] = None,
    ) -> None:
        """
        Args:
            length: rod length L (m).
            gravity: gravitational acceleration g (m/s^2).
            damping: damping coefficient b (1/s).
            integrator: fixed-step integrator (default: RK4Integrator).
        """
        super().__init__(integrator=integrator or RK4Integrator())
        self.length = float(length)
        self.gravity = float(gravity)
        self.damping = float(damping)

    @classmethod
    def from_parameters(cls, params: Any, integrator: Optional[Any] = None) -> "DampedPendulum":
        """Build from any object exposing length_m, gravity and damping."""
        return cls(
            length=params.length_m,
            gravity=params.gravity,
            damping=params.damping,
            integrator=integrator,
        )

    def angular_acceleration(self, theta: float, omega: float) -> float:
        return -(self.gravity / self.length) * np.sin(theta) - self.damping * omega

    def rhs(self, x: np.ndarray, u: np.ndarray, t: float) -> np.ndarray:
        theta, omega = x[0], x[1]
        return np.array([omega, self.angular_acceleration(theta, omega)])

    def advance(self, theta: float, omega: float, h: float, t: float = 0.0) -> Tuple[float, float]:
        """
        One fixed step of size h from (theta, omega) at time t.
        Unlike step(), it leaves the model clock untouched.
        """
        x_next = self.integrator.step(self.rhs, np.array([theta, omega], dtype=float), _NO_INPUT, t, h)
        return float(x_next[0]), float(x_next[1])


def pendulum_step(theta: float, omega: float, params: Any, h: float) -> Tuple[float, float]:
    """
    Pure RK4 step of the damped pendulum.

    Args:
        theta: angle (rad), not wrapped.
        omega: angular velocity (rad/s).
        params: object with length_m, gravity, damping (e.g. SimulationParameters).
        h: fixed step size (s).

    Returns:
        (theta_next, omega_next). Bit-identical for identical inputs.
    """
    return DampedPendulum.from_parameters(params).advance(theta, omega, h)


def pendulum_energy(theta: float, omega: float, mass: float, gravity: float, length: float) -> Energies:
    """Kinetic 1/2 m (L omega)^2, potential m g L (1 - cos theta), and their sum."""
    v = length * omega
    kinetic = 0.5 * mass * v * v
    potential = mass * gravity * length * (1.0 - float(np.cos(theta)))
    return Energies(kinetic=kinetic, potential=potential, total=kinetic + potential)
