"""Save and load session configurations as JSON."""

import json
from pathlib import Path
from typing import Any, Dict, Union

import numpy as np


def _convert(d: Any) -> Any:
    """Convert numpy values (arrays, scalars) to plain Python for JSON."""
    if isinstance(d, np.ndarray):
        return d.tolist()
    if isinstance(d, dict):
        return {k: _convert(v) for k, v in d.items()}
    if isinstance(d, (list, tuple)):
        return [_convert(x) for x in d]
    if isinstance(d, np.floating):
        return float(d)
    if isinstance(d, np.integer):
        return int(d)
    return d


def save_config(config: Dict[str, Any], path: Union[str, Path]) -> None:
    """
    Save a configuration (dict) to JSON.
    Numpy arrays are converted to lists.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(_convert(config), f, indent=2, ensure_ascii=False)


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a configuration from JSON."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
