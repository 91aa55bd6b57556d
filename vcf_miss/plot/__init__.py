"""High-level plotting API for the vcf_miss package.

The submodules are:
	base               – shared style and figure output helpers
	missingness_plots  – SNP completeness and per-sample missingness plots

Import convenience: ``from vcf_miss.plot import plot_completeness_summary``.
"""

from .missingness_plots import *  # noqa: F401,F403
from .missingness_plots import __all__ as _plots_all
from .base import emit_figure  # noqa: F401

__all__ = list(_plots_all) + ["emit_figure"]
