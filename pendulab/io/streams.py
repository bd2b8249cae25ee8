"""Synthetic frame-duration streams for driving a session without a display."""

from typing import Iterator, List, Optional, Sequence, Union

import numpy as np


class FrameStream:
    """
    Pre-computed sequence of wall-clock frame durations (seconds), for replay
    or headless simulation. Iterating yields one duration per render tick.
    """

    def __init__(self, durations: Union[Sequence[float], np.ndarray]) -> None:
        """
        Args:
            durations: frame durations in seconds (>= 0).
        """
        self._dt = np.asarray(durations, dtype=float).ravel()
        if np.any(self._dt < 0):
            raise ValueError("frame durations must be >= 0")
        self._index = 0

    @classmethod
    def constant(cls, fps: float, n_frames: int) -> "FrameStream":
        """Steady display refresh at `fps` frames per second."""
        if fps <= 0:
            raise ValueError("fps must be > 0")
        return cls(np.full(n_frames, 1.0 / fps))

    @classmethod
    def jittered(
        cls,
        mean_dt: float,
        jitter: float,
        n_frames: int,
        seed: Optional[int] = None,
    ) -> "FrameStream":
        """
        Irregular refresh: mean_dt +/- uniform jitter, clipped at zero.
        Same seed, same sequence.
        """
        rng = np.random.default_rng(seed)
        dt = mean_dt + rng.uniform(-jitter, jitter, size=n_frames)
        return cls(np.clip(dt, 0.0, None))

    def with_stall(self, at_frame: int, stall_s: float) -> "FrameStream":
        """Copy of this stream where frame `at_frame` lasts `stall_s` (e.g. a hidden tab)."""
        dt = self._dt.copy()
        dt[at_frame] = stall_s
        return FrameStream(dt)

    def timestamps(self, start: float = 0.0) -> np.ndarray:
        """Absolute tick timestamps: start, start + dt0, start + dt0 + dt1, ..."""
        return start + np.concatenate([[0.0], np.cumsum(self._dt)])

    def total(self) -> float:
        return float(np.sum(self._dt))

    def tolist(self) -> List[float]:
        return self._dt.tolist()

    def __iter__(self) -> Iterator[float]:
        self._index = 0
        return self

    def __next__(self) -> float:
        if self._index >= len(self._dt):
            raise StopIteration
        dt = float(self._dt[self._index])
        self._index += 1
        return dt

    def __len__(self) -> int:
        return len(self._dt)

    def reset(self) -> None:
        self._index = 0
