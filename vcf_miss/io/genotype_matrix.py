"""In-memory genotype matrix container.

A ``GenotypeMatrix`` holds numeric genotype calls for S sites × N samples
with ``NaN`` marking absent calls, alongside the sample ids and a small
per-site annotation table. Filtering never mutates an instance; a new one
is returned instead.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

import numpy as np
import pandas as pd

__all__ = ["GenotypeMatrix", "SITE_COLUMNS"]

SITE_COLUMNS = ["Chrom", "Pos", "ID", "Ref", "Alts"]


class GenotypeMatrix:
	"""Sites × samples matrix of genotype dosages.

	Parameters
	----------
	calls : array-like
		2-D numeric array (sites × samples). ``NaN`` (or ``None``) marks a
		missing call.
	samples : sequence of str | None
		Sample ids, one per column. Defaults to ``sample_1..sample_N``.
	sites : pandas.DataFrame | None
		Per-site annotation, one row per matrix row. When omitted a
		table with ``ID`` = ``site_1..site_S`` is synthesised.
	kept_mask : numpy.ndarray | None
		Boolean mask over the rows of the source the matrix was read from
		(e.g. VCF records). Maintained by :meth:`subset_sites` so a filtered
		matrix still knows which source records it covers.
	"""

	is_genotype_matrix = True

	def __init__(
		self,
		calls: Union[np.ndarray, Sequence[Sequence[Optional[float]]]],
		samples: Optional[Sequence[str]] = None,
		sites: Optional[pd.DataFrame] = None,
		kept_mask: Optional[np.ndarray] = None,
	):
		arr = np.array(calls, dtype=float)
		if arr.ndim == 1 and arr.size == 0:
			arr = arr.reshape(0, len(samples) if samples is not None else 0)
		if arr.ndim != 2:
			raise ValueError(f"calls must be a 2-D array, got {arr.ndim} dimension(s)")
		n_sites, n_samples = arr.shape
		if samples is None:
			samples = [f"sample_{i + 1}" for i in range(n_samples)]
		samples = [str(s) for s in samples]
		if len(samples) != n_samples:
			raise ValueError(f"Got {len(samples)} sample ids for {n_samples} matrix columns")
		if sites is None:
			sites = pd.DataFrame({"ID": [f"site_{i + 1}" for i in range(n_sites)]})
		if len(sites) != n_sites:
			raise ValueError(f"Got {len(sites)} site annotations for {n_sites} matrix rows")
		if kept_mask is None:
			kept_mask = np.ones(n_sites, dtype=bool)
		kept_mask = np.asarray(kept_mask, dtype=bool)
		if int(kept_mask.sum()) != n_sites:
			raise ValueError("kept_mask must select exactly one source row per matrix row")
		arr.setflags(write=False)
		self._calls = arr
		self._samples = samples
		self._sites = sites.reset_index(drop=True)
		self._kept_mask = kept_mask

	# -- accessors --------------------------------------------------------
	@property
	def calls(self) -> np.ndarray:
		"""Read-only float array of calls (NaN = missing)."""
		return self._calls

	@property
	def samples(self) -> list:
		return list(self._samples)

	@property
	def sites(self) -> pd.DataFrame:
		return self._sites.copy()

	@property
	def kept_mask(self) -> np.ndarray:
		return self._kept_mask.copy()

	@property
	def shape(self):
		return self._calls.shape

	@property
	def n_sites(self) -> int:
		return self._calls.shape[0]

	@property
	def n_samples(self) -> int:
		return self._calls.shape[1]

	def __len__(self) -> int:
		return self.n_sites

	def __repr__(self) -> str:
		return f"GenotypeMatrix(sites={self.n_sites}, samples={self.n_samples})"

	# -- transformations --------------------------------------------------
	def subset_sites(self, mask: Union[np.ndarray, Sequence[bool]]) -> "GenotypeMatrix":
		"""Return a new matrix restricted to rows where ``mask`` is True."""
		mask = np.asarray(mask, dtype=bool)
		if mask.shape != (self.n_sites,):
			raise ValueError(f"Row mask of length {mask.size} does not match {self.n_sites} sites")
		source_mask = self._kept_mask.copy()
		source_mask[np.flatnonzero(self._kept_mask)[~mask]] = False
		return GenotypeMatrix(
			self._calls[mask],
			samples=self._samples,
			sites=self._sites.loc[mask],
			kept_mask=source_mask,
		)

	def to_frame(self) -> pd.DataFrame:
		"""Return the calls as a DataFrame (rows = site ids, columns = samples)."""
		if "ID" in self._sites.columns:
			index = self._sites["ID"].astype(str).to_list()
		else:
			index = None
		return pd.DataFrame(self._calls, index=index, columns=self._samples)
