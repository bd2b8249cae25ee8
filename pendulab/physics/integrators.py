"""
Fixed-step numerical integrators for ODEs: x_{n+1} = step(f, x_n, u_n, t_n, dt).

Pure numerical level: no dependency on the session or its components.
Interface: step(f, x, u, t, dt) -> x_next. No adaptive step control.
"""

from typing import Callable

import numpy as np

# Type for ODE right-hand side: (x, u, t) -> dx/dt
RHS = Callable[[np.ndarray, np.ndarray, float], np.ndarray]


def euler_step(f: RHS, x: np.ndarray, u: np.ndarray, t: float, dt: float) -> np.ndarray:
    """Explicit Euler, order 1: x_{n+1} = x_n + dt * f(x_n, u_n, t_n)."""
    return x + dt * f(x, u, t)


def midpoint_step(f: RHS, x: np.ndarray, u: np.ndarray, t: float, dt: float) -> np.ndarray:
    """Midpoint (RK2): evaluation at interval center."""
    k1 = f(x, u, t)
    k2 = f(x + 0.5 * dt * k1, u, t + 0.5 * dt)
    return x + dt * k2


def rk4_step(f: RHS, x: np.ndarray, u: np.ndarray, t: float, dt: float) -> np.ndarray:
    """
    Classical Runge-Kutta 4, order 4.

    Stages at t, t + dt/2, t + dt/2, t + dt; weights (1, 2, 2, 1) / 6.
    """
    k1 = f(x, u, t)
    k2 = f(x + 0.5 * dt * k1, u, t + 0.5 * dt)
    k3 = f(x + 0.5 * dt * k2, u, t + 0.5 * dt)
    k4 = f(x + dt * k3, u, t + dt)
    return x + (dt / 6.0) * (k1 + 2 * k2 + 2 * k3 + k4)


class EulerIntegrator:
    """Explicit Euler integrator, order 1."""

    @staticmethod
    def step(f: RHS, x: np.ndarray, u: np.ndarray, t: float, dt: float) -> np.ndarray:
        return euler_step(f, x, u, t, dt)


class MidpointIntegrator:
    """Midpoint integrator (RK2)."""

    @staticmethod
    def step(f: RHS, x: np.ndarray, u: np.ndarray, t: float, dt: float) -> np.ndarray:
        return midpoint_step(f, x, u, t, dt)


class RK4Integrator:
    """Runge-Kutta 4 integrator, order 4."""

    @staticmethod
    def step(f: RHS, x: np.ndarray, u: np.ndarray, t: float, dt: float) -> np.ndarray:
        return rk4_step(f, x, u, t, dt)
