"""Base interface for per-step session components."""

from abc import ABC, abstractmethod
from typing import Any, Dict


class SessionComponent(ABC):
    """
    Base interface for components driven once per integration step:
    oscillation detector, challenge evaluator.
    """

    @abstractmethod
    def initialize(self, **kwargs: Any) -> None:
        """Reset the component's internal state."""
        pass

    @abstractmethod
    def step(
        self,
        *,
        theta: float,
        omega: float,
        t: float,
        dt: float,
        **kwargs: Any,
    ) -> Dict[str, Any]:
        """
        Observe one freshly integrated step.

        Args:
            theta: angle after the step (rad)
            omega: angular velocity after the step (rad/s)
            t: simulated time after the step (s)
            dt: step size (s)
            **kwargs: outputs of components earlier in the pipeline

        Returns:
            Dictionary with the component's outputs (keys depend on the type).
        """
        pass

    def state_dict(self) -> Dict[str, Any]:
        """
        Internal state of the component, for snapshots and debugging.
        Override for stateful components.
        """
        return {}
