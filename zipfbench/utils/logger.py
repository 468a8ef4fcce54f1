"""Logging for benchmark agents.

Every module logs through a child of the ``zipfbench`` logger. Agents run on
worker threads, so records carry the thread name to tell their output apart.
"""
from __future__ import annotations

import logging
from typing import Optional, Union

ROOT_LOGGER_NAME = "zipfbench"

_FORMAT = "[%(levelname)s] %(asctime)s %(threadName)s - %(name)s - %(message)s"


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logger(name: str = ROOT_LOGGER_NAME, level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Attach the stream handler to ``name`` once and set its level.

    ``level`` is a :mod:`logging` constant or a level name such as ``"debug"``.
    Repeated calls (one per agent, one per test module) only change the level.
    """

    logger = logging.getLogger(name)
    logger.setLevel(_resolve_level(level))
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``zipfbench.<name>``, or the root benchmark logger."""

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        configure_logger()
    return root if name is None else root.getChild(name)
