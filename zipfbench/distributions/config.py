"""Distribution parameters for one id domain."""
from __future__ import annotations

import math
import numbers
from dataclasses import dataclass

from ..errors import ConfigurationError
from .offset import zipf_offset


def _is_integer(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _is_real(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


@dataclass(frozen=True)
class DistributionConfig:
    """Shape of the skewed distribution over one id domain (rows or columns)."""

    domain_size: int
    exponent: float
    ratio: float
    name: str = "domain"

    def validate(self) -> None:
        if not _is_integer(self.domain_size) or self.domain_size < 2:
            raise ConfigurationError(f"{self.name} id range must be an integer of at least 2, got {self.domain_size!r}")
        if not _is_real(self.exponent) or not math.isfinite(self.exponent) or self.exponent <= 0:
            raise ConfigurationError(f"{self.name} exponent must be positive, got {self.exponent!r}")
        if not _is_real(self.ratio) or not math.isfinite(self.ratio) or not 0.0 < self.ratio < 1.0:
            raise ConfigurationError(f"{self.name} ratio must be in (0, 1), got {self.ratio!r}")
        try:
            zipf_offset(self.domain_size, self.exponent, self.ratio)
        except ConfigurationError as exc:
            raise ConfigurationError(f"{self.name}: {exc}") from exc
