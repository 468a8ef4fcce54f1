"""Command line entry point for the Zipf benchmark.

Example::

    zipfbench --config zipf.json --agents 4 --output results/zipf.json \
        --trace-csv results/trace.csv --plot results/rank_frequency.png
"""
from __future__ import annotations

import argparse
import dataclasses
from pathlib import Path
from typing import List, Optional

from .benchmark.agents import run_agents
from .benchmark.client import InMemoryBitmapClient
from .benchmark.context import RunContext
from .config import OPERATIONS, ZipfConfig, load_config
from .errors import ConfigurationError
from .utils.io import write_results, write_trace
from .utils.logger import configure_logger, get_logger
from .utils.visualization import plot_rank_frequency
from .workloads.trace_analyzer import summarise_trace
from .workloads.traces import generate_id_trace

LOGGER = get_logger("cli")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Zipf-Mandelbrot set/clear bit benchmark")
    parser.add_argument("--config", type=Path, help="JSON benchmark config (hyphenated keys)")
    parser.add_argument("--hosts", nargs="+", default=["localhost:10101"], help="Target hosts; the first is provisioned")
    parser.add_argument("--agents", type=int, default=1, help="Number of agents to run concurrently")
    parser.add_argument("--iterations", type=int, help="Override iterations per agent")
    parser.add_argument("--seed", type=int, help="Override the base seed")
    parser.add_argument("--operation", choices=sorted(OPERATIONS), help="Override the operation")
    parser.add_argument("--timeout", type=float, help="Stop all agents after this many seconds")
    parser.add_argument("--output", type=Path, default=Path("results/zipf.json"), help="Where to write results")
    parser.add_argument("--trace-csv", type=Path, help="Also write agent 0's id trace to this CSV")
    parser.add_argument("--plot", type=Path, help="Also plot agent 0's rank frequencies to this image")
    parser.add_argument(
        "--log-level", default="INFO", type=str.upper, choices=LOG_LEVELS, help="Logging level"
    )
    return parser


def resolve_config(args: argparse.Namespace) -> ZipfConfig:
    config = load_config(args.config) if args.config else ZipfConfig()
    overrides = {}
    if args.iterations is not None:
        overrides["iterations"] = args.iterations
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.operation is not None:
        overrides["operation"] = args.operation
    if overrides:
        config = dataclasses.replace(config, **overrides)
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logger(level=args.log_level)

    if args.agents < 1:
        LOGGER.error("--agents must be at least 1, got %s", args.agents)
        return 2
    try:
        config = resolve_config(args)
        config.validate()
    except ConfigurationError as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        return 2
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.error("Cannot read config %s: %s", args.config, exc)
        return 2

    # agents share one in-process store, as they would share a real cluster
    store = InMemoryBitmapClient()
    ctx = RunContext(timeout_s=args.timeout)
    results = run_agents(
        config,
        client_factory=lambda: store,
        hosts=args.hosts,
        agent_count=args.agents,
        ctx=ctx,
        provisioner=store.provision_index,
    )
    write_results({"config": config.to_dict(), "agents": results}, args.output)

    if args.trace_csv or args.plot:
        trace = generate_id_trace(config, agent_index=0)
        summary = summarise_trace(trace)
        LOGGER.info(
            "Agent 0 trace: %s ops, %s distinct rows (top-%s share %.3f, rank/id rho %.3f), "
            "%s distinct columns (top-%s share %.3f, rank/id rho %.3f)",
            summary.operations,
            summary.rows.distinct_ids,
            summary.top_k,
            summary.rows.top_share,
            summary.rows.rank_id_spearman,
            summary.columns.distinct_ids,
            summary.top_k,
            summary.columns.top_share,
            summary.columns.rank_id_spearman,
        )
        if args.trace_csv:
            write_trace(trace, args.trace_csv)
        if args.plot:
            plot_rank_frequency(trace, path=args.plot, title=config.name)

    return 1 if any("error" in result for result in results) else 0


if __name__ == "__main__":
    raise SystemExit(main())
