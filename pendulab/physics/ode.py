"""Base model for systems described by ODEs: dx/dt = f(x, u, t)."""

from typing import Any, Dict, Optional

import numpy as np

from pendulab.physics.integrators import RK4Integrator


class ODEModel:
    """
    Base class for ODE models: dx/dt = rhs(x, u, t).
    Subclasses implement rhs(); the integrator advances the state by a fixed dt.
    """

    def __init__(self, integrator: Optional[Any] = None) -> None:
        """
        Args:
            integrator: object with method step(f, x, u, t, dt). Default: RK4.
        """
        self.integrator = integrator or RK4Integrator()
        self._t: float = 0.0

    def rhs(self, x: np.ndarray, u: np.ndarray, t: float) -> np.ndarray:
        """Right-hand side dx/dt = rhs(x, u, t). To be implemented by subclasses."""
        raise NotImplementedError("Subclasses must implement rhs(x, u, t).")

    def initialize(self, **kwargs: Any) -> None:
        self._t = float(kwargs.get("t", 0.0))

    def step(
        self,
        *,
        state: np.ndarray,
        dt: float,
        u: Optional[np.ndarray] = None,
        **kwargs: Any,
    ) -> Dict[str, Any]:
        """Advance `state` by one fixed step `dt`; returns {"state": x_next, "t": t_next}."""
        x = np.atleast_1d(np.asarray(state, dtype=float))
        u_arr = np.atleast_1d(u) if u is not None else np.zeros(0)
        x_next = self.integrator.step(self.rhs, x, u_arr, self._t, dt)
        self._t += dt
        return {"state": x_next, "t": self._t}

    def state_dict(self) -> Dict[str, Any]:
        return {"t": self._t}
