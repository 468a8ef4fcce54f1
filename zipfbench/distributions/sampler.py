"""Bounded Zipf-Mandelbrot rank sampler.

Small domains are sampled by inverting a precomputed CDF table. Domains larger
than ``max_table_size`` use rejection-inversion (Hörmann and Derflinger, 1996),
which needs constant memory and a couple of ``log``/``exp`` calls per draw, so
id ranges of ``10**11`` and beyond cost nothing up front.
"""
from __future__ import annotations

import math

import numpy as np

from ..utils.logger import get_logger
from .config import DistributionConfig
from .offset import zipf_offset
from .seeding import ROW_DOMAIN, SAMPLER_STREAM, derive_rng

LOGGER = get_logger("distributions.sampler")

DEFAULT_MAX_TABLE_SIZE = 1 << 22


def zipf_mandelbrot_pmf(domain_size: int, exponent: float, offset: float) -> np.ndarray:
    """Normalised pmf ``p(k) ∝ (k + offset) ** -exponent`` for ``k`` in ``[0, N)``.

    Weights are computed relative to rank 0 in log space so that a tiny offset
    (very skewed configs) does not overflow.
    """

    ranks = np.arange(domain_size, dtype=np.float64)
    log_rel = -exponent * (np.log(ranks + offset) - np.log(offset))
    weights = np.exp(log_rel)
    return weights / weights.sum()


def _log1p_over_x(x: float) -> float:
    if abs(x) > 1e-8:
        return math.log1p(x) / x
    return 1.0 - x * (0.5 - x * (1.0 / 3.0 - 0.25 * x))


def _expm1_over_x(x: float) -> float:
    if abs(x) > 1e-8:
        return math.expm1(x) / x
    return 1.0 + x * 0.5 * (1.0 + x / 3.0 * (1.0 + 0.25 * x))


class _RejectionInversion:
    """Constant-memory Zipf-Mandelbrot draws over ranks ``[0, N)``.

    ``h(x) = (x + offset) ** -exponent`` is the unnormalised density and ``H``
    its antiderivative. A uniform point is drawn under ``H`` between the
    bucket edges, inverted to a rank, and kept if it falls inside the area of
    width ``h(rank)`` at the top of that rank's bucket. ``h`` is convex, so
    each bucket contains its accept area and rank ``k`` is kept with
    probability proportional to ``h(k)``.
    """

    def __init__(self, domain_size: int, exponent: float, offset: float) -> None:
        self.max_rank = domain_size - 1
        self.exponent = exponent
        self.offset = offset
        self._h_low = self._H(0.5) - self._h(0)
        self._h_high = self._H(domain_size - 0.5)

    def _h(self, k: float) -> float:
        return math.exp(-self.exponent * math.log(k + self.offset))

    def _H(self, x: float) -> float:
        log_x = math.log(x + self.offset)
        return _expm1_over_x((1.0 - self.exponent) * log_x) * log_x

    def _H_inverse(self, y: float) -> float:
        t = y * (1.0 - self.exponent)
        if t <= -1.0:
            # only reachable for exponent < 1, below the support of H
            return -self.offset
        return math.exp(_log1p_over_x(t) * y) - self.offset

    def draw(self, rng: np.random.Generator) -> int:
        while True:
            u = self._h_high + rng.random() * (self._h_low - self._h_high)
            x = self._H_inverse(u)
            k = min(max(int(math.floor(x + 0.5)), 0), self.max_rank)
            if u >= self._H(k + 0.5) - self._h(k):
                return k


class SkewedIdSampler:
    """Draw ranks in ``[0, N-1]`` from a Zipf-Mandelbrot distribution.

    Rank 0 is the most likely. The probability of rank ``N-1`` divided by the
    probability of rank 0 equals ``config.ratio``. ``domain`` keeps the row and
    column samplers of one seed on separate random streams.
    """

    def __init__(
        self,
        config: DistributionConfig,
        seed: int,
        domain: int = ROW_DOMAIN,
        max_table_size: int = DEFAULT_MAX_TABLE_SIZE,
    ) -> None:
        config.validate()
        self.config = config
        self.seed = seed
        self.offset = zipf_offset(config.domain_size, config.exponent, config.ratio)
        self._max_rank = config.domain_size - 1
        self._rng = derive_rng(seed, SAMPLER_STREAM, domain)
        if config.domain_size <= max_table_size:
            self._pmf = zipf_mandelbrot_pmf(config.domain_size, config.exponent, self.offset)
            cdf = np.cumsum(self._pmf)
            self._cdf = cdf / cdf[-1]
            self._rejection = None
        else:
            self._pmf = None
            self._cdf = None
            self._rejection = _RejectionInversion(config.domain_size, config.exponent, self.offset)
        LOGGER.debug(
            "Built %s sampler (%s): N=%s exponent=%s ratio=%s offset=%.6g seed=%s",
            config.name,
            "table" if self._rejection is None else "rejection-inversion",
            config.domain_size,
            config.exponent,
            config.ratio,
            self.offset,
            seed,
        )

    @property
    def domain_size(self) -> int:
        return self.config.domain_size

    @property
    def uses_table(self) -> bool:
        return self._rejection is None

    def probabilities(self) -> np.ndarray:
        """Return the exact pmf. Only available when the CDF table was built."""

        if self._pmf is None:
            raise ValueError(
                f"{self.config.name} sampler over {self.domain_size} ids has no probability table"
            )
        return self._pmf.copy()

    def next(self) -> int:
        """Draw one rank."""

        if self._rejection is not None:
            return self._rejection.draw(self._rng)
        u = self._rng.random()
        rank = int(np.searchsorted(self._cdf, u, side="right"))
        return min(rank, self._max_rank)

    def sample(self, size: int) -> np.ndarray:
        """Draw ``size`` ranks at once as an ``int64`` array."""

        if self._rejection is not None:
            return np.fromiter((self.next() for _ in range(size)), dtype=np.int64, count=size)
        u = self._rng.random(size)
        ranks = np.searchsorted(self._cdf, u, side="right")
        return np.minimum(ranks, self._max_rank).astype(np.int64)
