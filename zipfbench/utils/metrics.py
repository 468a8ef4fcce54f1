"""Latency statistics accumulated while a benchmark runs."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, MutableMapping

import numpy as np


@dataclass
class LatencySummary:
    """Aggregated latency statistics for one benchmark run."""

    count: int
    total_ms: float
    min_ms: float
    max_ms: float
    mean_ms: float
    stddev_ms: float
    p50_ms: float
    p95_ms: float
    p99_ms: float

    def to_dict(self) -> Dict[str, float]:
        return dict(self.__dict__)


class LatencyStats:
    """Collect per-call latencies, recorded in seconds and reported in ms."""

    def __init__(self) -> None:
        self._latencies_ms: List[float] = []

    def add(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError(f"Latency must be non-negative, got {seconds}")
        self._latencies_ms.append(seconds * 1000.0)

    def extend(self, seconds: Iterable[float]) -> None:
        for value in seconds:
            self.add(value)

    def summary(self) -> LatencySummary:
        latencies = np.asarray(self._latencies_ms, dtype=float)
        if latencies.size == 0:
            return LatencySummary(0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)

        p50, p95, p99 = np.percentile(latencies, [50, 95, 99])
        return LatencySummary(
            count=int(latencies.size),
            total_ms=float(np.sum(latencies)),
            min_ms=float(np.min(latencies)),
            max_ms=float(np.max(latencies)),
            mean_ms=float(np.mean(latencies)),
            stddev_ms=float(np.std(latencies)),
            p50_ms=float(p50),
            p95_ms=float(p95),
            p99_ms=float(p99),
        )


def add_to_results(stats: LatencyStats, results: MutableMapping[str, object]) -> None:
    """Merge the summary of ``stats`` into a benchmark results mapping."""

    summary = stats.summary()
    results.update(summary.to_dict())
    results["throughput_rps"] = compute_throughput(summary)


def compute_throughput(summary: LatencySummary) -> float:
    """Operations per second implied by sequential calls of the given latency."""

    if summary.count == 0 or summary.total_ms <= 0:
        return 0.0
    return summary.count / (summary.total_ms / 1000.0)
