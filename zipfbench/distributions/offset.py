"""Ratio to Zipf-Mandelbrot offset conversion.

The Zipf-Mandelbrot pmf over ranks ``k = 0 .. N-1`` is proportional to
``(k + offset) ** -exponent``. The offset is the parameter the sampler needs,
but its effect depends on ``N``, which makes benchmark configs painful to
reuse across domain sizes. The *ratio* is the probability of the least likely
rank divided by that of the most likely rank::

    ratio = (offset / (offset + N - 1)) ** exponent

It does not depend on ``N``. A ratio close to 0 is the most skewed
distribution for a given ``(N, exponent)`` and a ratio close to 1 is nearly
uniform.
"""
from __future__ import annotations

import math

from ..errors import ConfigurationError


def zipf_offset(domain_size: int, exponent: float, ratio: float) -> float:
    """Return the offset that yields ``ratio`` for ``domain_size`` and ``exponent``."""

    if domain_size < 2:
        raise ConfigurationError(f"domain size must be at least 2, got {domain_size}")
    if not math.isfinite(exponent) or exponent <= 0:
        raise ConfigurationError(f"exponent must be a positive finite number, got {exponent}")
    if not math.isfinite(ratio) or not 0.0 < ratio < 1.0:
        raise ConfigurationError(f"ratio must be strictly between 0 and 1, got {ratio}")

    z = ratio ** (1.0 / exponent)
    if z >= 1.0:
        # ratio rounds to 1 once raised to 1/exponent
        raise ConfigurationError(
            f"ratio {ratio} is too close to 1 for exponent {exponent}; the distribution would be uniform"
        )
    offset = z * (domain_size - 1) / (1.0 - z)
    if not offset > 0.0 or not math.isfinite(offset):
        raise ConfigurationError(
            f"ratio {ratio} is too small for exponent {exponent}; the offset underflows to {offset}"
        )
    return offset
