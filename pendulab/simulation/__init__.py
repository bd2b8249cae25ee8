"""
Simulation driving: fixed-step accumulator and render-loop scheduling.
"""

from pendulab.simulation.loop import FrameLoop, ReplayScheduler
from pendulab.simulation.stepper import FixedStepper

__all__ = [
    "FixedStepper",
    "FrameLoop",
    "ReplayScheduler",
]
