"""Tests for TrajectoryHistory."""

import numpy as np

from pendulab.core import TrajectoryHistory


def test_append_and_get() -> None:
    history = TrajectoryHistory()
    history.append(time=0.016, theta=0.5)
    history.append(time=0.032, theta=0.49)
    assert len(history) == 2
    np.testing.assert_allclose(history.get("theta"), [0.5, 0.49])
    assert history.get("missing").size == 0
    assert set(history.to_dict()) == {"time", "theta"}
    assert set(history.to_dict(["time"])) == {"time"}


def test_max_length_keeps_latest() -> None:
    history = TrajectoryHistory(max_length=3)
    for i in range(5):
        history.append(time=float(i))
    assert len(history) == 3
    np.testing.assert_allclose(history.get("time"), [2.0, 3.0, 4.0])
    history.clear()
    assert len(history) == 0
    assert history.keys() == []


def test_to_csv(tmp_path) -> None:
    history = TrajectoryHistory()
    history.append(time=0.5, energy=1.25)
    history.append(time=1.0, energy=1.0)
    path = tmp_path / "trajectory.csv"
    history.to_csv(path)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines == ["time,energy", "0.5,1.25", "1.0,1.0"]
