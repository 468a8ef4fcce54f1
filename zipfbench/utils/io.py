"""Reading benchmark configs, writing results and id traces."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import pandas as pd

from ..errors import ConfigurationError
from .logger import get_logger

LOGGER = get_logger("utils.io")


def ensure_parent_dir(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def write_trace(trace: pd.DataFrame, path: Path) -> None:
    """Write an id trace as CSV, one row per operation."""

    ensure_parent_dir(path)
    trace.to_csv(path, index=False)
    LOGGER.info("Wrote trace of %s operations to %s", len(trace), path)


def write_results(results: Any, path: Path, *, indent: int = 2) -> None:
    """Write benchmark results as JSON.

    Agent errors are exception objects and latencies may be numpy scalars;
    both are written through ``str``.
    """

    ensure_parent_dir(path)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(results, handle, indent=indent, default=str)
    LOGGER.info("Wrote results to %s", path)


def load_json_object(path: Path) -> Dict[str, Any]:
    """Read a JSON object from ``path``.

    Malformed JSON and top-level values other than an object raise
    :class:`~zipfbench.errors.ConfigurationError`; a missing file raises
    :class:`OSError` as usual.
    """

    with path.open("r", encoding="utf-8") as handle:
        try:
            data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"{path}: malformed JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: expected a JSON object, got {type(data).__name__}")
    LOGGER.debug("Loaded %s keys from %s", len(data), path)
    return data
