"""Exceptions raised by the benchmark core."""
from __future__ import annotations


class ConfigurationError(ValueError):
    """A benchmark or distribution parameter is invalid."""


class ProvisioningError(RuntimeError):
    """Index or frame setup on the target service failed."""


class RankOutOfRangeError(IndexError):
    """A rank outside ``[0, domain_size)`` was passed to a permutation."""

    def __init__(self, rank: int, domain_size: int) -> None:
        super().__init__(f"rank {rank} out of range [0, {domain_size})")
        self.rank = rank
        self.domain_size = domain_size
