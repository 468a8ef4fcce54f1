"""Skewed id distributions and repeatable id permutations."""

from .config import DistributionConfig
from .offset import zipf_offset
from .permutation import (
    PERMUTATION_METHODS,
    FeistelPermutationGenerator,
    PermutationGenerator,
    new_permutation_generator,
)
from .sampler import SkewedIdSampler, zipf_mandelbrot_pmf

__all__ = [
    "DistributionConfig",
    "zipf_offset",
    "PERMUTATION_METHODS",
    "FeistelPermutationGenerator",
    "PermutationGenerator",
    "new_permutation_generator",
    "SkewedIdSampler",
    "zipf_mandelbrot_pmf",
]
