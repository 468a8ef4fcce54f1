"""Id pair generation shared by the benchmark driver and offline traces."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
import pandas as pd

from ..config import ZipfConfig
from ..distributions.config import DistributionConfig
from ..distributions.permutation import PermutationGenerator, new_permutation_generator
from ..distributions.sampler import SkewedIdSampler
from ..distributions.seeding import COLUMN_DOMAIN, ROW_DOMAIN

TRACE_COLUMNS = ["iteration", "row_rank", "column_rank", "row_id", "column_id"]


def agent_seed(base_seed: int, agent_index: int) -> int:
    """Seed of one agent; distinct agents draw distinct, reproducible sequences."""

    return base_seed + agent_index


@dataclass
class DomainPipeline:
    """Skewed sampler followed by a permutation and a constant base id."""

    sampler: SkewedIdSampler
    permutation: PermutationGenerator
    base_id: int = 0

    @classmethod
    def build(
        cls,
        config: DistributionConfig,
        seed: int,
        base_id: int = 0,
        method: str = "shuffle",
        domain: int = ROW_DOMAIN,
    ) -> "DomainPipeline":
        sampler = SkewedIdSampler(config, seed, domain)
        permutation = new_permutation_generator(config.domain_size, seed, method, domain)
        return cls(sampler=sampler, permutation=permutation, base_id=base_id)

    def draw(self) -> Tuple[int, int]:
        """Return ``(rank, absolute id)`` for one draw."""

        rank = self.sampler.next()
        return rank, self.base_id + self.permutation.map(rank)


@dataclass
class IdPair:
    row_rank: int
    column_rank: int
    row_id: int
    column_id: int


class IdPairGenerator:
    """Row and column pipelines seeded ``seed`` and ``seed + 1``.

    The two pipelines also carry different domain tags, so the columns of agent
    ``i`` never replay the rows of agent ``i + 1`` (both use seed ``s + i + 1``).
    """

    def __init__(self, rows: DomainPipeline, columns: DomainPipeline) -> None:
        self.rows = rows
        self.columns = columns

    @classmethod
    def from_config(cls, config: ZipfConfig, seed: int) -> "IdPairGenerator":
        rows = DomainPipeline.build(
            config.bitmap_distribution, seed, config.base_bitmap_id, config.permutation, ROW_DOMAIN
        )
        columns = DomainPipeline.build(
            config.profile_distribution, seed + 1, config.base_profile_id, config.permutation, COLUMN_DOMAIN
        )
        return cls(rows, columns)

    def next_pair(self) -> IdPair:
        row_rank, row_id = self.rows.draw()
        column_rank, column_id = self.columns.draw()
        return IdPair(row_rank, column_rank, row_id, column_id)


def generate_id_trace(config: ZipfConfig, agent_index: int = 0, iterations: Optional[int] = None) -> pd.DataFrame:
    """Draw the id pairs one agent would send, without executing anything.

    The sequence is identical to what :class:`~zipfbench.benchmark.zipf.ZipfBenchmark`
    emits for the same config and agent index.
    """

    config.validate()
    count = config.iterations if iterations is None else iterations
    generator = IdPairGenerator.from_config(config, agent_seed(config.seed, agent_index))

    records = np.empty((count, len(TRACE_COLUMNS)), dtype=np.int64)
    for n in range(count):
        pair = generator.next_pair()
        records[n] = (n, pair.row_rank, pair.column_rank, pair.row_id, pair.column_id)
    return pd.DataFrame(records, columns=TRACE_COLUMNS)
