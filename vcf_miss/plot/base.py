"""Base plotting utilities shared across plot modules.

This module centralises style configuration and small helper wrappers
around seaborn/matplotlib so higher-level plot functions remain concise
and consistent. Each plot function returns a matplotlib Figure when an
``output_path`` is not provided; otherwise the figure is saved and
closed (to avoid memory accumulation in batch runs) and ``None`` is
returned.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import matplotlib.pyplot as plt
import seaborn as sns

__all__ = [
	"set_plot_style",
	"save_figure",
	"emit_figure",
]


def set_plot_style() -> None:
	"""Apply a unified visual style.

	Centralised so we can later expose style choices via configuration.
	"""
	sns.set_theme(style="whitegrid")
	plt.rcParams.update({
		"axes.titlesize": 13,
		"axes.labelsize": 11,
		"font.size": 10,
		"figure.dpi": 100,
	})


def save_figure(fig: plt.Figure, output_path: Optional[Union[str, Path]]) -> Optional[plt.Figure]:
	"""Save figure if ``output_path`` provided else return it.

	Parameters
	----------
	fig : matplotlib.figure.Figure
		Figure to save or return.
	output_path : str | Path | None
		Path to save. If None the figure is returned and *not* closed.
	"""
	if output_path:
		fig.savefig(output_path, bbox_inches="tight")
		plt.close(fig)
		return None
	return fig


def emit_figure(
	fig: plt.Figure,
	*,
	output_dir: Optional[Union[str, Path]] = None,
	filename: str = "figure.png",
	show: bool = False,
) -> Optional[Path]:
	"""Hand a finished figure to its output surface and release it.

	Saves to ``output_dir / filename`` when a directory is given, shows it
	when ``show`` is set, and always closes the figure afterwards. Returns
	the written path (or None).
	"""
	path = None
	if output_dir is not None:
		outdir = Path(output_dir)
		outdir.mkdir(parents=True, exist_ok=True)
		path = outdir / filename
		fig.savefig(path, bbox_inches="tight")
	if show:
		plt.show()
	plt.close(fig)
	return path
