"""Seed derivation for the per-domain random streams."""
from __future__ import annotations

import numpy as np

SAMPLER_STREAM = 0
SHUFFLE_STREAM = 1
FEISTEL_STREAM = 2

ROW_DOMAIN = 0
COLUMN_DOMAIN = 1

_UINT64_MASK = (1 << 64) - 1


def derive_rng(seed: int, stream: int, domain: int = ROW_DOMAIN) -> np.random.Generator:
    """Return a PCG64 generator for ``(seed, domain, stream)``.

    The stream tag keeps a sampler and a permutation built from the same seed
    independent. The domain tag keeps agent ``i``'s columns (seed ``s + 1``)
    apart from agent ``i + 1``'s rows, which share that seed. Negative seeds
    are folded into uint64.
    """

    return np.random.default_rng([int(seed) & _UINT64_MASK, domain, stream])
