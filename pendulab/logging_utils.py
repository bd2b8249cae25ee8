"""Shared logging helpers for the simulation session and its components."""

import logging
import os
from typing import Optional

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}


def _parse_level(level_str: Optional[str], default: int) -> int:
    if not level_str:
        return default
    return _LEVELS.get(level_str.strip().upper(), default)


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Return a logger for the ``pendulab`` namespace that emits to stderr.

    Level of the ``pendulab`` root logger:
      - set to ``level`` whenever it is passed;
      - otherwise set once, when the handler is first attached, from the
        ``LOG_LEVEL`` environment variable (e.g. DEBUG, INFO), default INFO.
        Later calls keep whatever level the application has configured.

    A single stream handler is attached to the ``pendulab`` root logger; child
    loggers propagate to it.
    """
    root = logging.getLogger("pendulab")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        root.addHandler(handler)
        if level is None:
            root.setLevel(_parse_level(os.environ.get("LOG_LEVEL"), logging.INFO))
    if level is not None:
        root.setLevel(level)

    if name == "pendulab" or name.startswith("pendulab."):
        return logging.getLogger(name)
    return logging.getLogger(f"pendulab.{name}")
