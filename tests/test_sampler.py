import numpy as np
import pytest

from zipfbench.distributions.config import DistributionConfig
from zipfbench.distributions.sampler import SkewedIdSampler
from zipfbench.errors import ConfigurationError


def make_sampler(seed=42, domain_size=100, exponent=1.5, ratio=0.1):
    return SkewedIdSampler(DistributionConfig(domain_size, exponent, ratio), seed)


def test_draws_stay_in_domain():
    sampler = make_sampler()
    draws = [sampler.next() for _ in range(5_000)]
    assert min(draws) >= 0
    assert max(draws) <= 99


def test_same_seed_same_sequence():
    a = make_sampler(seed=7)
    b = make_sampler(seed=7)
    assert [a.next() for _ in range(1_000)] == [b.next() for _ in range(1_000)]


def test_different_seed_different_sequence():
    a = make_sampler(seed=7)
    b = make_sampler(seed=8)
    assert [a.next() for _ in range(1_000)] != [b.next() for _ in range(1_000)]


def test_low_ranks_are_drawn_more_often():
    sampler = make_sampler()
    counts = np.bincount(sampler.sample(100_000), minlength=100)
    assert counts[0] >= counts[50] >= counts[99]
    assert counts[0] / counts.sum() == pytest.approx(sampler.probabilities()[0], abs=0.005)


def test_probability_ratio_matches_config():
    sampler = make_sampler(ratio=0.02)
    probs = sampler.probabilities()
    assert probs[-1] / probs[0] == pytest.approx(0.02)


def test_near_uniform_ratio_spreads_draws():
    sampler = make_sampler(ratio=0.99)
    counts = np.bincount(sampler.sample(50_000), minlength=100)
    assert counts.min() > 0
    assert counts.max() / counts.min() < 1.5


def test_exponent_one_is_supported():
    sampler = make_sampler(exponent=1.0)
    assert 0 <= sampler.next() < 100


@pytest.mark.parametrize(
    "domain_size, exponent, ratio",
    [(1, 1.5, 0.1), (100, 0.0, 0.1), (100, -2.0, 0.1), (100, 1.5, 0.0), (100, 1.5, 1.0)],
)
def test_invalid_configs_fail_construction(domain_size, exponent, ratio):
    with pytest.raises(ConfigurationError):
        SkewedIdSampler(DistributionConfig(domain_size, exponent, ratio), seed=1)


def test_underflowing_ratio_fails_construction():
    with pytest.raises(ConfigurationError):
        SkewedIdSampler(DistributionConfig(100, 0.05, 1e-20), seed=1)


@pytest.mark.parametrize("exponent, ratio", [(1.5, 0.1), (0.5, 0.01), (1.0, 0.25), (1.01, 0.001)])
def test_rejection_inversion_matches_pmf(exponent, ratio):
    config = DistributionConfig(100, exponent, ratio)
    exact = SkewedIdSampler(config, seed=3).probabilities()
    sampler = SkewedIdSampler(config, seed=3, max_table_size=0)
    assert not sampler.uses_table

    draws = sampler.sample(100_000)
    assert draws.min() >= 0 and draws.max() <= 99
    freqs = np.bincount(draws, minlength=100) / draws.size
    assert np.abs(freqs - exact).max() < 0.01


def test_rejection_inversion_is_deterministic():
    config = DistributionConfig(1_000, 1.2, 0.05)
    a = SkewedIdSampler(config, seed=11, max_table_size=0)
    b = SkewedIdSampler(config, seed=11, max_table_size=0)
    assert [a.next() for _ in range(500)] == [b.next() for _ in range(500)]


def test_huge_domain_uses_constant_memory_path():
    sampler = SkewedIdSampler(DistributionConfig(10**11, 1.01, 0.25), seed=1)
    assert not sampler.uses_table
    draws = sampler.sample(2_000)
    assert draws.min() >= 0
    assert draws.max() < 10**11
    with pytest.raises(ValueError):
        sampler.probabilities()


def test_row_and_column_domains_draw_different_sequences():
    config = DistributionConfig(1_000, 1.1, 0.2)
    rows = SkewedIdSampler(config, seed=4, domain=0)
    columns = SkewedIdSampler(config, seed=4, domain=1)
    assert list(rows.sample(200)) != list(columns.sample(200))
