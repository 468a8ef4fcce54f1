"""Id trace analysis."""
from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import List

import numpy as np
import pandas as pd
from scipy import stats


@dataclass
class AxisStatistics:
    distinct_ids: int
    top_ids: List[int]
    top_share: float
    rank_id_spearman: float


@dataclass
class TraceStatistics:
    operations: int
    rows: AxisStatistics
    columns: AxisStatistics
    top_k: int = field(default=10)


def _rank_id_correlation(ranks: pd.Series, ids: pd.Series) -> float:
    if ranks.nunique() < 2 or ids.nunique() < 2:
        return float("nan")
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        rho, _ = stats.spearmanr(ranks, ids)
    return float(rho)


def summarise_axis(df: pd.DataFrame, axis: str, top_k: int = 10) -> AxisStatistics:
    """Popularity profile of the ``row`` or ``column`` ids in a trace."""

    ids = df[f"{axis}_id"]
    counts = ids.value_counts()
    top = counts.head(top_k)
    share = float(top.sum() / len(ids)) if len(ids) else 0.0
    return AxisStatistics(
        distinct_ids=int(counts.size),
        top_ids=[int(value) for value in top.index],
        top_share=share,
        rank_id_spearman=_rank_id_correlation(df[f"{axis}_rank"], ids),
    )


def summarise_trace(df: pd.DataFrame, top_k: int = 10) -> TraceStatistics:
    """Summarise a trace produced by :func:`~zipfbench.workloads.traces.generate_id_trace`.

    A spearman correlation near zero between rank and id means the
    permutation has spread the hot ranks across the id range.
    """

    return TraceStatistics(
        operations=int(len(df)),
        rows=summarise_axis(df, "row", top_k),
        columns=summarise_axis(df, "column", top_k),
        top_k=top_k,
    )


def rank_frequencies(df: pd.DataFrame, axis: str, domain_size: int) -> np.ndarray:
    """Hit count of every raw rank in ``[0, domain_size)``."""

    return np.bincount(df[f"{axis}_rank"].to_numpy(), minlength=domain_size)
