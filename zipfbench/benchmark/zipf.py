"""Zipf set/clear benchmark driver."""
from __future__ import annotations

import time
from enum import Enum
from typing import Any, Dict, List, Optional

from ..config import ZipfConfig
from ..errors import ProvisioningError
from ..utils.logger import get_logger
from ..utils.metrics import LatencyStats, add_to_results
from ..workloads.traces import IdPairGenerator, agent_seed
from .client import Provisioner, QueryClient, format_bit_query
from .context import RunContext

LOGGER = get_logger("benchmark.zipf")


class DriverState(Enum):
    UNINITIALIZED = "uninitialized"
    CONFIGURED = "configured"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class ZipfBenchmark:
    """Set or clear bits at Zipf-Mandelbrot distributed (row, column) ids.

    Rows and columns each get a skewed rank sampler whose ranks are passed
    through a repeatable permutation, so the hot ids are spread over the whole
    range instead of sitting at ``0, 1, 2, ...``. One instance is one agent:
    it owns its generators and must be driven from a single thread.
    """

    def __init__(
        self,
        config: ZipfConfig,
        client: Optional[QueryClient] = None,
        provisioner: Optional[Provisioner] = None,
    ) -> None:
        self.config = config
        self.client = client
        self.provisioner = provisioner
        self.state = DriverState.UNINITIALIZED
        self.agent_index: Optional[int] = None
        self.seed: Optional[int] = None
        self.ids: Optional[IdPairGenerator] = None
        self.provisioning_error: Optional[Exception] = None
        self.error: Optional[str] = None

    def init(self, hosts: List[str], agent_index: int = 0) -> None:
        """Validate the config and build this agent's generators."""

        if self.state is not DriverState.UNINITIALIZED:
            raise RuntimeError(f"{self.config.name}: init called in state {self.state.value}")

        self.config.validate()
        self.agent_index = agent_index
        self.seed = agent_seed(self.config.seed, agent_index)
        self.ids = IdPairGenerator.from_config(self.config, self.seed)
        LOGGER.info(
            "Configured %s agent %s: seed=%s rows=%s columns=%s operation=%s",
            self.config.name,
            agent_index,
            self.seed,
            self.config.bitmap_id_range,
            self.config.profile_id_range,
            self.config.operation,
        )

        self._provision(hosts)
        self.state = DriverState.CONFIGURED

    def _provision(self, hosts: List[str]) -> None:
        if self.provisioner is None:
            return
        host = hosts[0] if hosts else None
        try:
            if host is None:
                raise ProvisioningError("no hosts given")
            self.provisioner(host, self.config.index, self.config.frame)
        except Exception as exc:
            if self.config.strict_provisioning:
                raise ProvisioningError(
                    f"provisioning {self.config.index}/{self.config.frame} on {host} failed: {exc}"
                ) from exc
            self.provisioning_error = exc
            LOGGER.warning("Provisioning %s/%s on %s failed: %s", self.config.index, self.config.frame, host, exc)

    def _results(self) -> Dict[str, Any]:
        return {"benchmark": self.config.name, "agent": self.agent_index}

    def run(self, ctx: Optional[RunContext] = None) -> Dict[str, Any]:
        """Run all iterations and return the latency statistics.

        An execution error stops the run at once and is reported under
        ``"error"``. A cancelled or expired ``ctx`` stops the run between
        iterations and the partial statistics are returned with
        ``"cancelled": True``.
        """

        if self.state is not DriverState.CONFIGURED:
            raise RuntimeError(f"{self.config.name}: run called in state {self.state.value}")

        results = self._results()
        if self.client is None:
            self.error = f"No client set for {self.config.name}"
            results["error"] = self.error
            self.state = DriverState.FAILED
            return results

        self.state = DriverState.RUNNING
        call = self.config.query_call
        stats = LatencyStats()
        completed = 0
        for n in range(self.config.iterations):
            if ctx is not None and ctx.done():
                LOGGER.info("Agent %s stopped after %s iterations: %s", self.agent_index, n, ctx.reason)
                results["cancelled"] = True
                results["cancel_reason"] = ctx.reason
                break

            # skewed ranks, permuted randomly but repeatably
            pair = self.ids.next_pair()
            query = format_bit_query(call, self.config.frame, pair.row_id, pair.column_id)

            start = time.perf_counter()
            try:
                self.client.execute_query(ctx, self.config.index, query, True)
            except Exception as exc:
                LOGGER.error("Agent %s failed on iteration %s (%s): %s", self.agent_index, n, query, exc)
                self.error = str(exc)
                results["error"] = self.error
                results["iterations"] = completed
                add_to_results(stats, results)
                self.state = DriverState.FAILED
                return results
            stats.add(time.perf_counter() - start)
            completed += 1

        results["iterations"] = completed
        add_to_results(stats, results)
        self.state = DriverState.COMPLETED
        return results
