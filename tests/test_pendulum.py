"""Tests for the damped pendulum: RK4 step, determinism and energy behaviour."""

import math

import numpy as np
import pytest

from pendulab.config import SimulationParameters
from pendulab.physics import DampedPendulum, EulerIntegrator, pendulum_energy, pendulum_step

H = 0.016


def _trajectory(model: DampedPendulum, theta0: float, n_steps: int, omega0: float = 0.0) -> np.ndarray:
    theta, omega = theta0, omega0
    out = [(theta, omega)]
    for _ in range(n_steps):
        theta, omega = model.advance(theta, omega, H)
        out.append((theta, omega))
    return np.array(out)


def _energies(traj: np.ndarray, length: float = 1.0, gravity: float = 9.8) -> np.ndarray:
    return np.array([pendulum_energy(th, om, 1.0, gravity, length).total for th, om in traj])


def test_rhs_is_damped_pendulum_law() -> None:
    model = DampedPendulum(length=2.0, gravity=9.8, damping=0.3)
    d = model.rhs(np.array([0.4, -1.1]), np.zeros(0), 0.0)
    assert d[0] == -1.1
    assert d[1] == pytest.approx(-(9.8 / 2.0) * math.sin(0.4) - 0.3 * (-1.1))


def test_pendulum_step_is_deterministic() -> None:
    params = SimulationParameters(length_m=1.3, damping=0.07, gravity=9.81)
    a = (0.7, 0.0)
    b = (0.7, 0.0)
    for _ in range(500):
        a = pendulum_step(a[0], a[1], params, H)
        b = pendulum_step(b[0], b[1], params, H)
        assert a == b


def test_pendulum_step_matches_model_and_ode_step() -> None:
    params = SimulationParameters(length_m=1.0, damping=0.1, gravity=9.8)
    model = DampedPendulum.from_parameters(params)
    theta, omega = pendulum_step(0.5, 0.2, params, H)
    assert (theta, omega) == model.advance(0.5, 0.2, H)
    out = model.step(state=np.array([0.5, 0.2]), dt=H)
    assert out["state"][0] == theta
    assert out["state"][1] == omega


def test_angle_is_not_wrapped() -> None:
    """A strong kick makes the pendulum loop over the top; theta keeps growing."""
    model = DampedPendulum(length=1.0, gravity=9.8, damping=0.0)
    traj = _trajectory(model, 0.0, 400, omega0=8.0)
    assert traj[-1, 0] > 2 * math.pi


def test_energy_values() -> None:
    e = pendulum_energy(0.0, 2.0, mass=2.0, gravity=9.8, length=1.5)
    assert e.kinetic == pytest.approx(0.5 * 2.0 * (1.5 * 2.0) ** 2)
    assert e.potential == 0.0
    e = pendulum_energy(math.pi / 2, 0.0, mass=2.0, gravity=9.8, length=1.5)
    assert e.kinetic == 0.0
    assert e.potential == pytest.approx(2.0 * 9.8 * 1.5)
    assert e.total == e.kinetic + e.potential


def test_energy_conserved_without_damping() -> None:
    model = DampedPendulum(length=1.0, gravity=9.8, damping=0.0)
    traj = _trajectory(model, math.radians(45), int(10.0 / H))
    energy = _energies(traj)
    assert np.max(np.abs(energy - energy[0])) < 1e-4 * energy[0]


def test_energy_decays_monotonically_with_damping() -> None:
    model = DampedPendulum(length=1.0, gravity=9.8, damping=0.5)
    traj = _trajectory(model, math.radians(60), 2000)
    energy = _energies(traj)
    assert np.all(np.diff(energy) <= 1e-6)
    assert energy[-1] < 0.01 * energy[0]


def test_rk4_beats_euler_on_energy() -> None:
    rk4 = DampedPendulum(length=1.0, gravity=9.8, damping=0.0)
    euler = DampedPendulum(length=1.0, gravity=9.8, damping=0.0, integrator=EulerIntegrator())
    e_rk4 = _energies(_trajectory(rk4, 0.5, 500))
    e_euler = _energies(_trajectory(euler, 0.5, 500))
    assert abs(e_euler[-1] - e_euler[0]) > 100 * abs(e_rk4[-1] - e_rk4[0])


def test_small_angle_period() -> None:
    """Two upward zero crossings are one period apart: 2*pi*sqrt(L/g)."""
    model = DampedPendulum(length=1.0, gravity=9.8, damping=0.0)
    traj = _trajectory(model, 0.05, 1000)
    theta = traj[:, 0]
    up = np.where((theta[:-1] < 0) & (theta[1:] >= 0))[0]
    period = (up[1] - up[0]) * H
    assert period == pytest.approx(2 * math.pi * math.sqrt(1.0 / 9.8), abs=2 * H)


def test_zero_length_is_not_clamped() -> None:
    model = DampedPendulum(length=0.0, gravity=9.8, damping=0.0)
    with pytest.raises(ZeroDivisionError):
        model.advance(0.1, 0.0, H)
