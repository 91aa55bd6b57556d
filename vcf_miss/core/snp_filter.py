"""Per-SNP missing data filtering with cutoff diagnostics.

``missing_by_snp`` runs in one of two modes:

1. Without ``cutoff`` (exploratory). Shows how much missing data each
   sample carries across a range of SNP completeness cutoffs, plus dot
   plots of the total SNPs retained and the overall proportion of missing
   data at each cutoff. Returns the per-cutoff summary table.
2. With ``cutoff``. Shows the same dot plots marked at the chosen cutoff,
   removes SNPs whose missing proportion exceeds ``1 - cutoff`` and
   returns the filtered genotype matrix.

If no SNP is genotyped in every sample the plots cannot be built: the
exploratory mode then returns per-sample missingness (so low-data samples
can be pruned first), and the filtering mode filters without plots.
"""

from __future__ import annotations

from numbers import Real
from pathlib import Path
from typing import Optional, Tuple, List, Union

import numpy as np
import pandas as pd

from ..exceptions import InvalidInputError, InvalidCutoffError
from ..io.genotype_matrix import GenotypeMatrix
from ..metrics.missingness import (
	site_missingness,
	sample_missingness,
	has_complete_sites,
	completeness_summary,
	sample_missingness_by_level,
	cutoff_keep_mask,
	percent_removed,
)
from ..plot.base import emit_figure
from ..plot.missingness_plots import plot_completeness_summary, plot_sample_missingness_ridges

__all__ = ["missing_by_snp", "is_genotype_container", "SUMMARY_PLOT", "RIDGE_PLOT"]

SUMMARY_PLOT = "snp_completeness_summary.png"
RIDGE_PLOT = "sample_missingness_ridges.png"

Container = Union[GenotypeMatrix, pd.DataFrame]


def is_genotype_container(obj) -> bool:
	"""True for objects this module can filter.

	Anything advertising ``is_genotype_matrix = True`` (``GenotypeMatrix``
	and look-alikes exposing ``calls``, ``samples`` and ``subset_sites``)
	or a sites × samples ``pandas.DataFrame``.
	"""
	if isinstance(obj, pd.DataFrame):
		return True
	return getattr(obj, "is_genotype_matrix", False) is True


def _calls_and_samples(matrix: Container) -> Tuple[np.ndarray, List[str]]:
	if isinstance(matrix, pd.DataFrame):
		try:
			values = matrix.to_numpy(dtype=float)
		except (TypeError, ValueError) as exc:
			raise InvalidInputError("genotype DataFrame must hold numeric calls (NaN for missing)") from exc
		return values, [str(c) for c in matrix.columns]
	return np.asarray(matrix.calls, dtype=float), list(matrix.samples)


def _subset(matrix: Container, keep: np.ndarray) -> Container:
	if isinstance(matrix, pd.DataFrame):
		return matrix.loc[keep].copy()
	return matrix.subset_sites(keep)


def _validate_cutoff(cutoff) -> float:
	if isinstance(cutoff, bool) or not isinstance(cutoff, Real):
		raise InvalidCutoffError(f"specified cutoff must be numeric, got {type(cutoff).__name__}")
	value = float(cutoff)
	# NaN fails both comparisons
	if not 0.0 <= value <= 1.0:
		raise InvalidCutoffError(f"specified cutoff must be a proportion between 0 and 1, got {cutoff}")
	return value


def _report_removed(site_miss: np.ndarray, cutoff: float, verbose: bool) -> float:
	pct = percent_removed(site_miss, cutoff)
	if verbose:
		print(f"{pct}% of SNPs fell below a completeness cutoff of {cutoff} and were removed from the VCF")
	return pct


def missing_by_snp(
	matrix: Container,
	cutoff: Optional[float] = None,
	*,
	output_dir: Optional[Union[str, Path]] = None,
	show: bool = True,
	verbose: bool = True,
):
	"""Visualise missing data per SNP and optionally filter by completeness.

	Parameters
	----------
	matrix : GenotypeMatrix | pandas.DataFrame
		Sites × samples genotype calls, ``NaN`` marking missing calls.
	cutoff : float | None
		Minimum proportion of samples that must be genotyped for a SNP to
		be retained (0-1). SNPs whose missing proportion exceeds
		``1 - cutoff`` are removed.
	output_dir : str | Path | None
		Directory receiving the PNG plots. When None plots are not saved.
	show : bool
		Display plots through ``matplotlib.pyplot.show``. Pass False for batch runs.
	verbose : bool
		Print progress / diagnostic messages.

	Returns
	-------
	GenotypeMatrix | pandas.DataFrame
		With ``cutoff``: the filtered matrix in the input's container type.
		Without ``cutoff``: the summary table (``filt``, ``missingness``,
		``snps_retained``), or a table of per-sample missingness (``id``,
		``missingness``) if no SNP is genotyped in every sample.

	Raises
	------
	InvalidInputError
		``matrix`` is not a recognised genotype container.
	InvalidCutoffError
		``cutoff`` is not numeric or lies outside [0, 1].
	"""
	if not is_genotype_container(matrix):
		raise InvalidInputError(
			f"specified matrix must be a GenotypeMatrix or a sites x samples DataFrame, got {type(matrix).__name__}"
		)
	if cutoff is not None:
		return _filter_with_cutoff(matrix, _validate_cutoff(cutoff), output_dir, show, verbose)
	return _explore(matrix, output_dir, show, verbose)


def _filter_with_cutoff(
	matrix: Container,
	cutoff: float,
	output_dir,
	show: bool,
	verbose: bool,
) -> Container:
	if verbose:
		print("cutoff is specified, filtered genotype matrix will be returned")
	values, _samples = _calls_and_samples(matrix)
	miss = site_missingness(values)

	if not has_complete_sites(miss):
		if verbose:
			print("0 SNPs passing 100% completeness threshold, visualizations cannot be generated, returning filtered matrix")
	else:
		summary = completeness_summary(values, miss)
		fig = plot_completeness_summary(summary, cutoff=cutoff)
		emit_figure(fig, output_dir=output_dir, filename=SUMMARY_PLOT, show=show)

	_report_removed(miss, cutoff, verbose)
	return _subset(matrix, cutoff_keep_mask(miss, cutoff))


def _explore(matrix: Container, output_dir, show: bool, verbose: bool) -> pd.DataFrame:
	if verbose:
		print("cutoff is not specified, exploratory visualizations will be generated")
	values, samples = _calls_and_samples(matrix)
	miss = site_missingness(values)

	if not has_complete_sites(miss):
		if verbose:
			print("0 SNPs passing 100% completeness threshold, low-data samples must be removed before creating visualizations")
		return sample_missingness(values, samples)

	# Part 1: how per-sample missingness shifts with the cutoff
	per_sample = sample_missingness_by_level(values, miss, samples)
	fig = plot_sample_missingness_ridges(per_sample)
	emit_figure(fig, output_dir=output_dir, filename=RIDGE_PLOT, show=show)

	# Part 2: SNPs retained vs overall missingness, to pick the cutoff
	summary = completeness_summary(values, miss)
	fig = plot_completeness_summary(summary)
	emit_figure(fig, output_dir=output_dir, filename=SUMMARY_PLOT, show=show)
	return summary
