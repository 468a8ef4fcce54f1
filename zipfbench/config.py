"""Benchmark configuration as read from JSON."""
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping

from .distributions.config import DistributionConfig
from .distributions.permutation import PERMUTATION_METHODS
from .errors import ConfigurationError
from .utils.io import load_json_object

OPERATIONS = {"set": "SetBit", "clear": "ClearBit"}

_FIELD_TYPES = {"int": (int,), "float": (int, float), "str": (str,), "bool": (bool,)}


def _json_key(field_name: str) -> str:
    return field_name.replace("_", "-")


@dataclass(frozen=True)
class ZipfConfig:
    """Parameters of one Zipf set/clear benchmark.

    JSON configs use the hyphenated form of each field name, for example
    ``"bitmap-id-range"`` for :attr:`bitmap_id_range`.
    """

    name: str = "zipf"
    base_bitmap_id: int = 0
    base_profile_id: int = 0
    bitmap_id_range: int = 100_000
    profile_id_range: int = 100_000
    iterations: int = 1_000
    seed: int = 1
    index: str = "benchmark"
    frame: str = "zipf"
    bitmap_exponent: float = 1.01
    bitmap_ratio: float = 0.25
    profile_exponent: float = 1.01
    profile_ratio: float = 0.25
    operation: str = "set"
    permutation: str = "shuffle"
    strict_provisioning: bool = False

    @property
    def bitmap_distribution(self) -> DistributionConfig:
        return DistributionConfig(self.bitmap_id_range, self.bitmap_exponent, self.bitmap_ratio, name="bitmap")

    @property
    def profile_distribution(self) -> DistributionConfig:
        return DistributionConfig(self.profile_id_range, self.profile_exponent, self.profile_ratio, name="profile")

    @property
    def query_call(self) -> str:
        """PQL call name for :attr:`operation`."""

        return OPERATIONS[self.operation]

    def validate_operation(self) -> None:
        if not isinstance(self.operation, str) or self.operation not in OPERATIONS:
            raise ConfigurationError(f"Unsupported operation: \"{self.operation!s}\" (must be \"set\" or \"clear\")")

    def validate(self) -> None:
        """Check every field, the operation first."""

        self.validate_operation()
        self._check_types()
        if self.iterations < 0:
            raise ConfigurationError(f"iterations must be non-negative, got {self.iterations}")
        if self.base_bitmap_id < 0 or self.base_profile_id < 0:
            raise ConfigurationError(
                f"base ids must be non-negative, got bitmap={self.base_bitmap_id} profile={self.base_profile_id}"
            )
        if not self.index:
            raise ConfigurationError("index name must not be empty")
        if not self.frame:
            raise ConfigurationError("frame name must not be empty")
        if self.permutation not in PERMUTATION_METHODS:
            raise ConfigurationError(
                f"Unsupported permutation method: \"{self.permutation}\" "
                f"(must be one of {', '.join(PERMUTATION_METHODS)})"
            )
        self.bitmap_distribution.validate()
        self.profile_distribution.validate()

    def _check_types(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            expected = _FIELD_TYPES[f.type]
            # bool is an int subclass, so true/false must not pass for a number
            if not isinstance(value, expected) or (isinstance(value, bool) and bool not in expected):
                raise ConfigurationError(f"{_json_key(f.name)} must be {f.type}, got {value!r}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ZipfConfig":
        known = {_json_key(f.name): f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            attr = known.get(key) or (key if key in known.values() else None)
            if attr is None:
                raise ConfigurationError(f"Unknown config key: \"{key}\"")
            kwargs[attr] = value
        config = cls(**kwargs)
        config.validate_operation()
        config._check_types()
        return config

    def to_dict(self) -> Dict[str, Any]:
        return {_json_key(key): value for key, value in asdict(self).items()}


def load_config(path: Path) -> ZipfConfig:
    """Load a :class:`ZipfConfig` from a JSON file."""

    return ZipfConfig.from_dict(load_json_object(Path(path)))
