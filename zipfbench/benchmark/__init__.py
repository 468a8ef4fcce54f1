"""Benchmark driver, run context and query client interfaces."""

from .agents import run_agents
from .client import (
    InMemoryBitmapClient,
    QueryClient,
    QueryError,
    format_bit_query,
)
from .context import RunContext
from .zipf import DriverState, ZipfBenchmark

__all__ = [
    "run_agents",
    "InMemoryBitmapClient",
    "QueryClient",
    "QueryError",
    "format_bit_query",
    "RunContext",
    "DriverState",
    "ZipfBenchmark",
]
