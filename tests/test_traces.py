from collections import Counter

import numpy as np
import pytest

from zipfbench.config import ZipfConfig
from zipfbench.distributions.config import DistributionConfig
from zipfbench.workloads.trace_analyzer import rank_frequencies, summarise_trace
from zipfbench.workloads.traces import TRACE_COLUMNS, DomainPipeline, generate_id_trace


def scenario_pipeline(method="shuffle"):
    return DomainPipeline.build(DistributionConfig(100, 1.5, 0.1), seed=42, method=method)


@pytest.mark.parametrize("method", ["shuffle", "feistel"])
def test_scenario_reproduces_output_multiset(method):
    first = scenario_pipeline(method)
    second = scenario_pipeline(method)
    first_ids = [first.draw()[1] for _ in range(1_000)]
    second_ids = [second.draw()[1] for _ in range(1_000)]
    assert Counter(first_ids) == Counter(second_ids)
    assert first_ids == second_ids
    assert all(0 <= value < 100 for value in first_ids)


def test_draw_applies_base_id():
    pipeline = DomainPipeline.build(DistributionConfig(10, 1.5, 0.1), seed=1, base_id=500)
    rank, value = pipeline.draw()
    assert value == 500 + pipeline.permutation.map(rank)


def test_trace_shape_and_determinism():
    config = ZipfConfig(iterations=200, bitmap_id_range=100, profile_id_range=50, seed=7)
    trace = generate_id_trace(config)
    assert list(trace.columns) == TRACE_COLUMNS
    assert len(trace) == 200
    assert trace["iteration"].tolist() == list(range(200))
    assert trace.equals(generate_id_trace(config))
    assert not trace.equals(generate_id_trace(config, agent_index=1))


def test_trace_iterations_override():
    config = ZipfConfig(iterations=200, bitmap_id_range=100, profile_id_range=50)
    assert len(generate_id_trace(config, iterations=15)) == 15


def test_summary_shows_skew_and_decorrelation():
    config = ZipfConfig(
        iterations=5_000,
        bitmap_id_range=1_000,
        profile_id_range=1_000,
        bitmap_exponent=1.5,
        bitmap_ratio=0.001,
        profile_exponent=1.5,
        profile_ratio=0.001,
        seed=11,
    )
    trace = generate_id_trace(config)
    summary = summarise_trace(trace, top_k=10)

    assert summary.operations == 5_000
    assert summary.rows.distinct_ids <= 1_000
    assert len(summary.rows.top_ids) == 10
    # 10 of 1000 ids carry far more than 1% of the traffic
    assert summary.rows.top_share > 0.2
    assert set(summary.rows.top_ids) != set(range(10))
    assert abs(summary.rows.rank_id_spearman) < 0.5
    assert abs(summary.columns.rank_id_spearman) < 0.5


def test_rank_frequencies_counts_every_draw():
    config = ZipfConfig(iterations=300, bitmap_id_range=20, profile_id_range=30)
    trace = generate_id_trace(config)
    counts = rank_frequencies(trace, "column", 30)
    assert counts.shape == (30,)
    assert counts.sum() == 300
    assert counts[:5].sum() > counts[-5:].sum()


def test_huge_feistel_domain_generates_trace():
    config = ZipfConfig(profile_id_range=10**11, permutation="feistel", iterations=5)
    trace = generate_id_trace(config)
    assert len(trace) == 5
    assert trace["column_id"].between(0, 10**11 - 1).all()
    assert trace["column_rank"].between(0, 10**11 - 1).all()
    assert trace.equals(generate_id_trace(config))


def test_next_agent_rows_do_not_replay_columns():
    # identical row and column domains: agent 1's rows share agent 0's column seed
    config = ZipfConfig(iterations=200, bitmap_id_range=1_000, profile_id_range=1_000, seed=3)
    agent0 = generate_id_trace(config, agent_index=0)
    agent1 = generate_id_trace(config, agent_index=1)
    assert agent1["row_id"].tolist() != agent0["column_id"].tolist()
    assert agent1["row_rank"].tolist() != agent0["column_rank"].tolist()
