"""Tests for the ChallengeEvaluator state machine."""

import pytest

from pendulab.config import ChallengeConfig, EvaluatorPolicy
from pendulab.game import ChallengeEvaluator, FinishReason, GamePhase


def _running(**kwargs) -> ChallengeEvaluator:
    params = dict(target_oscillations=2, time_limit=10.0, energy_epsilon=1e-3, energy_grace=1.0, safety_timeout=120.0)
    params.update(kwargs)
    ev = ChallengeEvaluator(**params)
    ev.start(0.0)
    return ev


def _step(ev: ChallengeEvaluator, t: float, delta: int = 0, energy: float = 1.0, theta: float = 0.5, omega: float = 1.0):
    return ev.step(theta=theta, omega=omega, t=t, dt=0.016, oscillation_delta=delta, energy=energy)


def test_steps_ignored_before_start() -> None:
    ev = ChallengeEvaluator()
    out = _step(ev, 200.0, delta=1, energy=0.0)
    assert out["phase"] is GamePhase.NOT_STARTED
    assert out["finished"] is False
    assert ev.oscillations == 0


def test_success_when_target_reached_in_time() -> None:
    ev = _running()
    assert _step(ev, 0.5, delta=1)["finished"] is False
    out = _step(ev, 1.0, delta=1)
    assert out["finished"] is True
    assert out["success"] is True
    assert out["reason"] is FinishReason.TARGET_REACHED
    assert ev.oscillations == 2
    assert ev.elapsed == 1.0


def test_failure_on_time_limit() -> None:
    ev = _running()
    assert _step(ev, 10.0)["finished"] is False
    out = _step(ev, 10.016)
    assert out["success"] is False
    assert out["reason"] is FinishReason.TIME_LIMIT


def test_time_limit_measured_from_start() -> None:
    ev = ChallengeEvaluator(target_oscillations=2, time_limit=10.0)
    ev.start(5.0)
    assert _step(ev, 14.9)["finished"] is False
    assert _step(ev, 15.1)["reason"] is FinishReason.TIME_LIMIT


def test_energy_failure_waits_for_grace_period() -> None:
    ev = _running()
    assert _step(ev, 0.5, energy=1e-5)["finished"] is False
    out = _step(ev, 1.5, energy=1e-5)
    assert out["reason"] is FinishReason.ENERGY_DEPLETED
    assert ev.success is False


def test_success_checked_before_energy_failure() -> None:
    ev = _running(target_oscillations=1)
    out = _step(ev, 2.0, delta=1, energy=0.0)
    assert out["reason"] is FinishReason.TARGET_REACHED


def test_failure_first_policy() -> None:
    ev = _running(target_oscillations=1, success_first=False)
    out = _step(ev, 2.0, delta=1, energy=0.0)
    assert out["reason"] is FinishReason.ENERGY_DEPLETED


def test_stall_rule_is_optional() -> None:
    ev = _running()
    assert _step(ev, 2.0, theta=0.01, omega=0.05)["finished"] is False
    ev = _running(stall_speed=0.1)
    assert _step(ev, 0.5, theta=0.01, omega=0.05)["finished"] is False  # grace period
    assert _step(ev, 2.0, theta=0.01, omega=0.05)["reason"] is FinishReason.STALLED


def test_safety_timeout_on_simulated_time() -> None:
    ev = _running(time_limit=500.0)
    assert _step(ev, 119.9)["finished"] is False
    assert _step(ev, 120.1)["reason"] is FinishReason.SAFETY_TIMEOUT


def test_finished_is_terminal() -> None:
    ev = _running()
    _step(ev, 11.0)
    assert ev.phase is GamePhase.FINISHED
    out = _step(ev, 11.1, delta=5)
    assert out["reason"] is FinishReason.TIME_LIMIT
    assert ev.oscillations == 0
    with pytest.raises(RuntimeError):
        ev.pause()


def test_pause_and_resume() -> None:
    ev = _running()
    ev.pause()
    assert ev.phase is GamePhase.PAUSED
    out = _step(ev, 50.0, delta=2)
    assert out["finished"] is False
    assert ev.oscillations == 0
    ev.resume()
    assert ev.phase is GamePhase.RUNNING


def test_invalid_transitions_raise() -> None:
    ev = ChallengeEvaluator()
    with pytest.raises(RuntimeError):
        ev.pause()
    with pytest.raises(RuntimeError):
        ev.resume()
    ev.start(0.0)
    with pytest.raises(RuntimeError):
        ev.start(0.0)
    with pytest.raises(RuntimeError):
        ev.resume()


def test_restart_after_finish_resets_counters() -> None:
    ev = _running()
    _step(ev, 0.5, delta=1)
    _step(ev, 11.0)
    ev.start(20.0)
    assert ev.phase is GamePhase.RUNNING
    assert ev.oscillations == 0
    assert ev.success is None
    assert ev.start_time == 20.0


def test_from_config_and_state_dict() -> None:
    ev = ChallengeEvaluator.from_config(
        ChallengeConfig(target_oscillations=3, time_limit_s=30.0),
        EvaluatorPolicy(energy_grace_s=10.0),
    )
    assert ev.target_oscillations == 3
    assert ev.energy_grace == 10.0
    state = ev.state_dict()
    assert state["phase"] == "not_started"
    assert state["reason"] is None
