"""Missing-data reductions over a sites × samples genotype matrix.

All functions take the raw float array (``NaN`` = missing call) so they
stay independent of the container the caller works with.
"""
from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

__all__ = [
    "THRESHOLD_GRID",
    "missing_mask",
    "site_missingness",
    "sample_missingness",
    "has_complete_sites",
    "meets_completeness",
    "completeness_summary",
    "sample_missingness_by_level",
    "cutoff_keep_mask",
    "percent_removed",
]

# Candidate SNP completeness levels shown in the diagnostic plots.
THRESHOLD_GRID = (0.3, 0.5, 0.6, 0.65, 0.7, 0.75, 0.8, 0.85, 0.9, 0.95, 1.0)

# Tolerance for completeness ties; far below 1 / N for any realistic sample count.
COMPLETENESS_ATOL = 1e-9


def missing_mask(values: np.ndarray) -> np.ndarray:
    """Boolean mask of missing calls."""
    return np.isnan(np.asarray(values, dtype=float))


def site_missingness(values: np.ndarray) -> np.ndarray:
    """Proportion of samples with a missing call at each site.

    A matrix without samples has nothing genotyped, so every site is
    reported as fully missing (1.0).
    """
    mask = missing_mask(values)
    n_sites, n_samples = mask.shape
    if n_samples == 0:
        return np.ones(n_sites, dtype=float)
    return mask.sum(axis=1) / n_samples


def sample_missingness(values: np.ndarray, samples: Sequence[str]) -> pd.DataFrame:
    """Per-sample missing proportion across all sites.

    Columns returned: id, missingness
    """
    mask = missing_mask(values)
    n_sites = mask.shape[0]
    if n_sites == 0:
        miss = np.full(mask.shape[1], np.nan)
    else:
        miss = mask.sum(axis=0) / n_sites
    return pd.DataFrame({"id": list(samples), "missingness": miss})


def has_complete_sites(site_miss: np.ndarray) -> bool:
    """True if at least one site passes the 100% completeness level."""
    return bool(np.any(np.asarray(site_miss) == 0))


def meets_completeness(site_miss: np.ndarray, level: float) -> np.ndarray:
    """Sites whose genotyped proportion (1 - missingness) is at least ``level``.

    Inclusive: a site exactly at the level passes. Ties are matched with an
    absolute tolerance (1 - 1/10 != 0.9 in floating point).
    """
    completeness = 1 - np.asarray(site_miss, dtype=float)
    return (completeness >= level) | np.isclose(completeness, level, rtol=0, atol=COMPLETENESS_ATOL)


def completeness_summary(values: np.ndarray, site_miss: np.ndarray) -> pd.DataFrame:
    """Total SNPs retained and overall missing proportion at each grid level.

    Columns returned: filt, missingness, snps_retained

    ``missingness`` is NaN for a level that retains no sites.
    """
    mask = missing_mask(values)
    n_samples = mask.shape[1]
    rows = []
    for level in THRESHOLD_GRID:
        sub = mask[meets_completeness(site_miss, level)]
        retained = sub.shape[0]
        cells = retained * n_samples
        rows.append({
            "filt": level,
            "missingness": sub.sum() / cells if cells else float("nan"),
            "snps_retained": retained,
        })
    df = pd.DataFrame(rows, columns=["filt", "missingness", "snps_retained"])
    df["snps_retained"] = df["snps_retained"].astype(int)
    return df


def sample_missingness_by_level(
    values: np.ndarray,
    site_miss: np.ndarray,
    samples: Sequence[str],
) -> pd.DataFrame:
    """Long-form table of each sample's missing proportion at every grid level.

    Columns returned: filt, id, snps

    ``snps`` is the fraction of the sites retained at ``filt`` that are
    missing in that sample (NaN when the level retains no sites).
    """
    mask = missing_mask(values)
    frames = []
    for level in THRESHOLD_GRID:
        sub = mask[meets_completeness(site_miss, level)]
        if sub.shape[0]:
            per_sample = sub.sum(axis=0) / sub.shape[0]
        else:
            per_sample = np.full(sub.shape[1], np.nan)
        frames.append(pd.DataFrame({
            "filt": level,
            "id": list(samples),
            "snps": per_sample,
        }))
    return pd.concat(frames, ignore_index=True)


def cutoff_keep_mask(site_miss: np.ndarray, cutoff: float) -> np.ndarray:
    """Sites kept under a completeness cutoff (missingness <= 1 - cutoff)."""
    return meets_completeness(site_miss, cutoff)


def percent_removed(site_miss: np.ndarray, cutoff: float) -> float:
    """Percentage of sites removed by ``cutoff``, rounded to 2 decimals."""
    site_miss = np.asarray(site_miss)
    if site_miss.size == 0:
        return 0.0
    removed = int(np.sum(~cutoff_keep_mask(site_miss, cutoff)))
    return round(100 * removed / site_miss.size, 2)
