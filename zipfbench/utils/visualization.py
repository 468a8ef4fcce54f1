"""Plotting utilities."""
from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from .io import ensure_parent_dir
from .logger import get_logger

LOGGER = get_logger("utils.visualization")


def _sorted_frequencies(values: pd.Series) -> np.ndarray:
    return values.value_counts().sort_values(ascending=False).to_numpy()


def plot_rank_frequency(df: pd.DataFrame, *, path: Path, title: str = "Zipf workload") -> None:
    """Plot hit frequency against popularity rank for rows and columns.

    The dashed lines show raw sampler ranks on the index axis; permutation does
    not change the frequency profile, only which ids carry it.
    """

    ensure_parent_dir(path)
    fig, axes = plt.subplots(1, 2, figsize=(10, 4))
    for ax, axis_name in zip(axes, ("row", "column")):
        freqs = _sorted_frequencies(df[f"{axis_name}_id"])
        ax.loglog(np.arange(1, len(freqs) + 1), freqs, marker=".", linestyle="none", label="ids by popularity")

        rank_counts = df[f"{axis_name}_rank"].value_counts().sort_index()
        ax.loglog(rank_counts.index.to_numpy() + 1, rank_counts.to_numpy(), linestyle="--", alpha=0.6, label="raw rank")

        ax.set_xlabel("Popularity rank")
        ax.set_ylabel("Operations")
        ax.set_title(f"{title}: {axis_name}s")
        ax.grid(True, linestyle="--", alpha=0.3)
        ax.legend()
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    LOGGER.info("Saved rank-frequency plot to %s", path)
