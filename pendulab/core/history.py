"""In-memory trajectory log and CSV export (energy graph, offline analysis)."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import numpy as np


class TrajectoryHistory:
    """
    Per-step buffer of time, angle, velocity, energy and oscillation count.
    Supports export to numpy and CSV.
    """

    def __init__(self, max_length: Optional[int] = None) -> None:
        """
        Args:
            max_length: max number of steps kept (None = unlimited); oldest dropped first.
        """
        self._max_length = max_length
        self._data: Dict[str, List[Any]] = {}
        self._step_count = 0

    def append(self, **kwargs: Any) -> None:
        """Add one record for the current step (key -> value)."""
        for key, value in kwargs.items():
            if key not in self._data:
                self._data[key] = []
            self._data[key].append(value)
        self._step_count += 1
        if self._max_length is not None and self._step_count > self._max_length:
            for key in self._data:
                self._data[key] = self._data[key][-self._max_length:]
            self._step_count = self._max_length

    def clear(self) -> None:
        self._data.clear()
        self._step_count = 0

    def get(self, key: str) -> np.ndarray:
        """Series for a key as a numpy array (empty if unknown)."""
        if key not in self._data:
            return np.array([])
        return np.array(self._data[key])

    def keys(self) -> List[str]:
        return list(self._data.keys())

    def to_dict(self, keys: Optional[List[str]] = None) -> Dict[str, np.ndarray]:
        """All series (or the selected ones) as a dict of arrays."""
        keys = keys or list(self._data.keys())
        return {k: self.get(k) for k in keys if k in self._data}

    def to_csv(
        self,
        path: Union[str, Path],
        keys: Optional[List[str]] = None,
        delimiter: str = ",",
    ) -> None:
        """Export to CSV: keys become columns, one row per step."""
        path = Path(path)
        keys = keys or list(self._data.keys())
        if not keys:
            path.write_text("")
            return
        arrays = [self.get(k) for k in keys]
        n = max(len(a) for a in arrays)
        rows = []
        for i in range(n):
            rows.append(delimiter.join(str(a[i]) if i < len(a) else "" for a in arrays))
        header = delimiter.join(keys)
        path.write_text(header + "\n" + "\n".join(rows), encoding="utf-8")

    def __len__(self) -> int:
        return self._step_count
