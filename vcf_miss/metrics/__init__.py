"""Metric computation subpackage."""

from .missingness import (  # noqa: F401
	THRESHOLD_GRID,
	site_missingness,
	sample_missingness,
	completeness_summary,
	sample_missingness_by_level,
)

__all__ = [
	"THRESHOLD_GRID",
	"site_missingness",
	"sample_missingness",
	"completeness_summary",
	"sample_missingness_by_level",
]
