"""Run several benchmark agents side by side in one process."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional

from ..config import ZipfConfig
from ..utils.logger import get_logger
from .client import Provisioner, QueryClient
from .context import RunContext
from .zipf import ZipfBenchmark

LOGGER = get_logger("benchmark.agents")


def _run_agent(
    config: ZipfConfig,
    client: QueryClient,
    hosts: List[str],
    agent_index: int,
    ctx: Optional[RunContext],
    provisioner: Optional[Provisioner],
) -> Dict[str, Any]:
    bench = ZipfBenchmark(config, client=client, provisioner=provisioner)
    bench.init(hosts, agent_index)
    return bench.run(ctx)


def run_agents(
    config: ZipfConfig,
    client_factory: Callable[[], QueryClient],
    hosts: List[str],
    agent_count: int,
    ctx: Optional[RunContext] = None,
    provisioner: Optional[Provisioner] = None,
) -> List[Dict[str, Any]]:
    """Run ``agent_count`` agents concurrently and return their results by agent index.

    Agent ``i`` uses seed ``config.seed + i``. Configuration errors are
    checked once up front so a bad config fails before any thread starts.
    """

    if agent_count < 1:
        raise ValueError(f"agent_count must be at least 1, got {agent_count}")
    config.validate()

    LOGGER.info("Starting %s %s agent(s) against %s", agent_count, config.name, ", ".join(hosts) or "<no hosts>")
    with ThreadPoolExecutor(max_workers=agent_count) as executor:
        futures = [
            executor.submit(_run_agent, config, client_factory(), hosts, agent_index, ctx, provisioner)
            for agent_index in range(agent_count)
        ]
        results = [future.result() for future in futures]

    failed = sum(1 for result in results if "error" in result)
    if failed:
        LOGGER.warning("%s of %s agent(s) failed", failed, agent_count)
    return results
