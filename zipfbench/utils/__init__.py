"""Shared utility helpers."""

from .io import (
    ensure_parent_dir,
    load_json_object,
    write_results,
    write_trace,
)
from .metrics import (
    LatencyStats,
    LatencySummary,
    add_to_results,
    compute_throughput,
)
from .visualization import plot_rank_frequency
from .logger import configure_logger, get_logger

__all__ = [
    "ensure_parent_dir",
    "load_json_object",
    "write_results",
    "write_trace",
    "LatencyStats",
    "LatencySummary",
    "add_to_results",
    "compute_throughput",
    "plot_rank_frequency",
    "configure_logger",
    "get_logger",
]
