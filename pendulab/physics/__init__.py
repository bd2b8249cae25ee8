"""
Physics models for the pendulum session.

Hierarchy:
  - integrators: fixed-step numerical integration (Euler, Midpoint, RK4)
  - ode: base ODE model (ODEModel)
  - pendulum: damped pendulum model, single RK4 step, mechanical energy
"""

# --- Integrators (numerical level) ---
from pendulab.physics.integrators import (
    EulerIntegrator,
    MidpointIntegrator,
    RK4Integrator,
    euler_step,
    midpoint_step,
    rk4_step,
)

# --- Base ODE model ---
from pendulab.physics.ode import ODEModel

# --- Pendulum ---
from pendulab.physics.pendulum import (
    DampedPendulum,
    Energies,
    pendulum_energy,
    pendulum_step,
)

__all__ = [
    # Integrators
    "EulerIntegrator",
    "MidpointIntegrator",
    "RK4Integrator",
    "euler_step",
    "midpoint_step",
    "rk4_step",
    # Base
    "ODEModel",
    # Pendulum
    "DampedPendulum",
    "Energies",
    "pendulum_energy",
    "pendulum_step",
]
