"""
Render-loop driver with an injected scheduler.

The host (browser animation frame, GUI timer, test harness) supplies
`request_tick(callback)`: schedule `callback(timestamp_s)` for the next frame.
One tick: measure the frame, advance the session, publish a snapshot, ask for
the next tick. Everything runs to completion inside the callback.
"""

from typing import Any, Callable, Iterable, Iterator, Optional

from pendulab.core.state import SessionSnapshot
from pendulab.logging_utils import get_logger

logger = get_logger(__name__)

TickCallback = Callable[[float], None]
RequestTick = Callable[[TickCallback], None]


class FrameLoop:
    """
    Per-frame driver of a PendulumSession.

    Pause and reset are plain state flips on the session; the loop keeps
    ticking and observes them at the top of the next tick.
    """

    def __init__(
        self,
        session: Any,
        request_tick: RequestTick,
        on_frame: Optional[Callable[[SessionSnapshot], None]] = None,
    ) -> None:
        """
        Args:
            session: PendulumSession (anything with advance(frame_dt) and snapshot()).
            request_tick: host capability scheduling the next tick.
            on_frame: receives the snapshot after each tick (drawing, HUD).
        """
        self.session = session
        self._request_tick = request_tick
        self._on_frame = on_frame
        self._last_timestamp: Optional[float] = None
        self._running = False
        self._ticks = 0

    def start(self) -> None:
        """Begin requesting ticks. The first tick only sets the time reference."""
        if self._running:
            return
        self._running = True
        self._last_timestamp = None
        self._request_tick(self.tick)

    def stop(self) -> None:
        """No further ticks are requested; a tick already scheduled does nothing."""
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def ticks(self) -> int:
        return self._ticks

    def tick(self, timestamp: float) -> None:
        if not self._running:
            return
        frame_dt = 0.0 if self._last_timestamp is None else timestamp - self._last_timestamp
        self._last_timestamp = timestamp
        n_steps = self.session.advance(frame_dt)
        self._ticks += 1
        if n_steps:
            logger.debug("tick %d: frame %.4fs, %d step(s)", self._ticks, frame_dt, n_steps)
        if self._on_frame is not None:
            self._on_frame(self.session.snapshot())
        if self._running:
            self._request_tick(self.tick)


class ReplayScheduler:
    """
    `request_tick` implementation fed by a sequence of frame durations.
    Replaces the display for headless runs: run() fires the pending callback
    with synthetic timestamps until the frames or the loop run out.
    """

    def __init__(self, frames: Iterable[float], start: float = 0.0) -> None:
        """
        Args:
            frames: frame durations (s), e.g. a FrameStream.
            start: timestamp of the first tick.
        """
        self._frames: Iterator[float] = iter(frames)
        self._timestamp = float(start)
        self._pending: Optional[TickCallback] = None
        self._first = True

    def __call__(self, callback: TickCallback) -> None:
        self._pending = callback

    def run(self, max_ticks: Optional[int] = None) -> int:
        """Fire ticks; returns how many were fired."""
        fired = 0
        while self._pending is not None and (max_ticks is None or fired < max_ticks):
            if not self._first:
                try:
                    self._timestamp += next(self._frames)
                except StopIteration:
                    break
            self._first = False
            callback, self._pending = self._pending, None
            callback(self._timestamp)
            fired += 1
        return fired
