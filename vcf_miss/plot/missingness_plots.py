"""Missing-data QC plotting functions.

Contains implementations for:
 - SNP completeness summary (SNPs retained / overall missingness per level)
 - Per-sample missingness ridges faceted by completeness level
 - Missing rate per sample (paged bar chart)

All functions follow the convention of returning a ``matplotlib.figure.Figure``
when ``output_path`` is not provided; otherwise they save and return ``None``.
"""

from __future__ import annotations

from math import ceil
from typing import Optional, Union, Dict

import pandas as pd
import numpy as np
import seaborn as sns
import matplotlib.pyplot as plt

from ..metrics.missingness import THRESHOLD_GRID
from .base import set_plot_style, save_figure

__all__ = [
	"plot_completeness_summary",
	"plot_sample_missingness_ridges",
	"plot_missing_rate_per_sample",
]

COMPLETENESS_LABEL = "SNP completeness cutoff"


def plot_completeness_summary(
	summary: pd.DataFrame,
	*,
	cutoff: Optional[float] = None,
	output_path: Optional[str] = None,
	title: str = "SNP completeness summary",
	color: str = "#264653",
) -> Optional[plt.Figure]:
	"""Two stacked dot plots over the completeness grid.

	Top panel: total SNPs retained per level. Bottom panel: total
	proportion of missing data among the retained SNPs. When ``cutoff`` is
	given both panels get a red vertical line at that level.
	"""
	required = {"filt", "snps_retained", "missingness"}
	if not required.issubset(summary.columns):
		raise ValueError(f"DataFrame must contain columns: {required}")
	set_plot_style()
	fig, (ax_top, ax_bottom) = plt.subplots(2, 1, figsize=(7, 8), sharex=True)
	panels = (
		(ax_top, "snps_retained", "total SNPs retained"),
		(ax_bottom, "missingness", "total proportion missing data"),
	)
	for ax, col, ylabel in panels:
		sns.scatterplot(data=summary, x="filt", y=col, color=color, s=40, edgecolor="none", ax=ax)
		if cutoff is not None:
			ax.axvline(cutoff, color="red")
		ax.set_xticks(list(THRESHOLD_GRID))
		ax.set_ylabel(ylabel)
		ax.set_xlabel(COMPLETENESS_LABEL)
	ax_bottom.tick_params(axis="x", labelrotation=45)
	ax_top.set_title(title if cutoff is None else f"{title} (cutoff={cutoff:g})")
	fig.tight_layout()
	return save_figure(fig, output_path)


def plot_sample_missingness_ridges(
	data: pd.DataFrame,
	*,
	output_path: Optional[str] = None,
	title: str = "Missing data per sample across completeness cutoffs",
	level_col: str = "filt",
	value_col: str = "snps",
	palette: str = "viridis",
	seed: int = 0,
) -> Optional[plt.Figure]:
	"""Ridge plot of per-sample missingness, one ridge per completeness level.

	Each ridge is a KDE of the per-sample missing proportions at that level,
	with the individual samples drawn as jittered points beneath it (a
	"raincloud"). Levels with fewer than two distinct values get points only.
	"""
	if not {level_col, value_col}.issubset(data.columns):
		raise ValueError(f"DataFrame must contain columns: {level_col}, {value_col}")
	set_plot_style()
	levels = sorted(data[level_col].dropna().unique(), reverse=True)
	if not levels:
		fig, ax = plt.subplots(figsize=(8, 3))
		ax.text(0.5, 0.5, "No data", ha="center", va="center", transform=ax.transAxes)
		ax.set_axis_off()
		return save_figure(fig, output_path)
	rng = np.random.default_rng(seed)
	colors = sns.color_palette(palette, n_colors=len(levels))
	fig, axes = plt.subplots(
		len(levels), 1, figsize=(8, 0.8 * len(levels) + 1.5), sharex=True, squeeze=False
	)
	for ax, level, color in zip(axes[:, 0], levels, colors):
		vals = data.loc[data[level_col] == level, value_col].dropna().to_numpy(dtype=float)
		if vals.size > 1 and np.ptp(vals) > 0:
			sns.kdeplot(
				x=vals, fill=True, alpha=0.25, color=color, clip=(0, 1),
				warn_singular=False, ax=ax,
			)
		if vals.size:
			# x in data units, y in axes fraction so points sit under the ridge
			jitter = rng.uniform(0.03, 0.2, size=vals.size)
			ax.scatter(vals, jitter, s=8, color=color, alpha=0.7, transform=ax.get_xaxis_transform())
		ax.set_xlim(0, 1)
		ax.set_yticks([])
		ax.set_ylabel(f"{level:g}", rotation=0, ha="right", va="center")
		ax.grid(False)
		sns.despine(ax=ax, left=True)
	axes[0, 0].set_title(title)
	axes[-1, 0].set_xlabel("missing data proportion in each sample")
	fig.supylabel(COMPLETENESS_LABEL)
	fig.tight_layout(h_pad=0.2)
	return save_figure(fig, output_path)


def _to_missing_frame(
	missing_rates: Union[Dict[str, float], pd.Series, pd.DataFrame],
) -> pd.DataFrame:
	"""Normalise dict / Series / DataFrame input to columns id, missingness."""
	if isinstance(missing_rates, dict):
		return pd.DataFrame({"id": list(missing_rates.keys()), "missingness": list(missing_rates.values())})
	if isinstance(missing_rates, pd.Series):
		return pd.DataFrame({"id": missing_rates.index.astype(str).to_list(), "missingness": missing_rates.values})
	if isinstance(missing_rates, pd.DataFrame):
		if {"id", "missingness"}.issubset(missing_rates.columns):
			return missing_rates[["id", "missingness"]].copy()
		raise ValueError("DataFrame must contain columns: id, missingness")
	raise TypeError("Input must be dict | Series | DataFrame")


def plot_missing_rate_per_sample(
	missing_rates: Union[Dict[str, float], pd.Series, pd.DataFrame],
	*,
	output_path: Optional[str] = None,
	title: str = "Missing rate per sample",
	base_color: str = "#4477AA",
	samples_per_panel: int = 100,
	rotation: int = 45,
) -> Optional[plt.Figure]:
	"""Multi-panel missing rate bar chart (fixed y 0..1, 5 ticks).

	Samples are sorted from most to least missing. The final panel is
	padded with blank bars so every panel has the same width.
	"""
	df = _to_missing_frame(missing_rates)
	df = df.sort_values("missingness", ascending=False).reset_index(drop=True)
	df["id"] = df["id"].astype(str)
	set_plot_style()
	n = len(df)
	panels = ceil(n / samples_per_panel) if n else 1
	fig_width = max(10, min(18, samples_per_panel * 0.18))
	fig, axes = plt.subplots(panels, 1, figsize=(fig_width, panels * 5), sharey=True, squeeze=False)
	for pi in range(panels):
		start = pi * samples_per_panel
		sub = df.iloc[start:start + samples_per_panel].copy()
		pad_needed = samples_per_panel - len(sub) if n > samples_per_panel else 0
		if pad_needed > 0:
			sub = pd.concat([
				sub,
				pd.DataFrame({
					"id": [" " * (i + 1) for i in range(pad_needed)],
					"missingness": [0.0] * pad_needed,
				}),
			], ignore_index=True)
		ax = axes[pi, 0]
		if not sub.empty:
			sns.barplot(data=sub, x="id", y="missingness", ax=ax, color=base_color)
		ax.set_xlabel("Sample")
		ax.set_ylabel("Missing rate" if pi == 0 else "")
		if pi == 0:
			ax.set_title(title)
		for label in ax.get_xticklabels():
			label.set_rotation(rotation)
			label.set_ha("right")
		ax.set_ylim(0, 1)
		ax.set_yticks([0.0, 0.25, 0.5, 0.75, 1.0])
		sns.despine(ax=ax)
	fig.tight_layout(h_pad=0.5)
	return save_figure(fig, output_path)
