"""Tests for OscillationDetector (debounced zero-crossing counting)."""

import math

import numpy as np

from pendulab.config import DetectorConfig
from pendulab.game import OscillationDetector
from pendulab.physics import DampedPendulum


def _detector(**kwargs) -> OscillationDetector:
    det = OscillationDetector(**kwargs)
    det.initialize(theta=0.5)
    return det


def test_initial_sign_from_release_angle() -> None:
    det = _detector()
    assert det.last_sign == 1
    assert det.last_cross_time is None
    det.initialize(theta=-0.3)
    assert det.last_sign == -1


def test_exact_zero_is_ignored() -> None:
    det = _detector()
    out = det.update(0.0, 1.0)
    assert out == {"crossing": False, "oscillation_delta": 0}
    assert det.last_sign == 1


def test_two_half_crossings_make_one_oscillation() -> None:
    det = _detector()
    out = det.update(-0.05, 1.0)
    assert out == {"crossing": True, "oscillation_delta": 0}
    assert det.half_crossings == 1
    assert det.oscillations == 0
    out = det.update(0.05, 2.0)
    assert out == {"crossing": True, "oscillation_delta": 1}
    assert det.half_crossings == 2
    assert det.oscillations == 1
    assert det.last_cross_time == 2.0


def test_same_sign_is_not_a_crossing() -> None:
    det = _detector()
    assert det.update(0.3, 1.0)["crossing"] is False
    assert det.update(0.01, 1.2)["crossing"] is False
    assert det.half_crossings == 0


def test_crossing_far_from_center_rejected_but_sign_tracked() -> None:
    det = _detector()
    assert det.update(-0.5, 1.0)["crossing"] is False
    assert det.last_sign == -1
    assert det.half_crossings == 0
    assert det.update(0.05, 2.0)["crossing"] is True


def test_rejected_crossing_without_sign_tracking() -> None:
    det = _detector(track_sign_on_reject=False)
    assert det.update(-0.5, 1.0)["crossing"] is False
    assert det.last_sign == 1
    # Back on the old side: no sign change relative to the stale sign.
    assert det.update(0.05, 2.0)["crossing"] is False
    assert det.half_crossings == 0


def test_debounce_rejects_quick_recrossing() -> None:
    det = _detector(debounce=0.1)
    assert det.update(-0.05, 1.0)["crossing"] is True
    assert det.update(0.02, 1.05)["crossing"] is False
    assert det.last_sign == 1
    assert det.update(-0.02, 1.08)["crossing"] is False
    assert det.last_sign == -1
    assert det.update(0.02, 1.15)["crossing"] is True
    assert det.half_crossings == 2
    assert det.oscillations == 1


def test_step_interface_and_state_dict() -> None:
    det = OscillationDetector.from_config(DetectorConfig(center_threshold_rad=0.2, debounce_s=0.05))
    det.initialize(theta=-1.0)
    out = det.step(theta=0.15, omega=2.0, t=0.4, dt=0.016)
    assert out["crossing"] is True
    assert det.state_dict() == {
        "last_sign": 1,
        "last_cross_time": 0.4,
        "half_crossings": 1,
        "oscillations": 0,
    }


def test_one_increment_per_period_undamped_30_degrees() -> None:
    """L=1, g=9.8, b=0, 30 degrees: exactly one full oscillation per period."""
    h = 0.016
    model = DampedPendulum(length=1.0, gravity=9.8, damping=0.0)
    det = OscillationDetector()
    theta, omega, t = math.radians(30), 0.0, 0.0
    det.initialize(theta=theta)
    increments = []
    for _ in range(1250):  # 20 s
        theta, omega = model.advance(theta, omega, h)
        t += h
        if det.update(theta, t)["oscillation_delta"]:
            increments.append(t)
    assert det.half_crossings == 20
    assert det.oscillations == 10
    assert 1.4 < increments[0] < 2.1
    spacing = np.diff(increments)
    assert np.all((spacing > 1.9) & (spacing < 2.2))
