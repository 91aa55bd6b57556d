"""Lightweight VCF reader producing genotype matrices.

This intentionally avoids external dependencies (pysam / cyvcf2) for a
streaming implementation sufficient for missing-data summaries: the GT
field of every record is turned into a numeric dosage with ``NaN`` for
missing calls. For large VCFs or performance-critical workflows you
should replace this with a backend powered by specialised libraries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Iterator, Optional, Sequence, Union
import gzip

import numpy as np
import pandas as pd

from ..utils import gt_dosage
from .genotype_matrix import GenotypeMatrix, SITE_COLUMNS


@dataclass
class GenotypeRecord:
	"""Container for a single locus' per-sample genotype attributes.

	Attributes
	----------
	chrom, pos, id, ref, alts : str
		Basic variant fields (POS is kept as string to avoid int cast cost;
		cast only if needed by caller).
	format_keys : List[str]
		FORMAT field keys in order.
	sample_fields : List[str]
		Raw colon-delimited field strings per sample.
	line : str
		The raw record line (newline stripped), used when writing a
		filtered copy of the VCF.
	"""

	chrom: str
	pos: str
	id: str
	ref: str
	alts: str
	format_keys: List[str]
	sample_fields: List[str]
	line: str = ""

	def extract_sample_value(self, sample_index: int, key: str) -> Optional[str]:
		"""Extract a value (e.g., DP, GQ, GT) for a given sample.

		Returns None if key not in FORMAT or value is '.'
		"""
		try:
			fi = self.format_keys.index(key)
		except ValueError:
			return None
		raw = self.sample_fields[sample_index]
		parts = raw.split(":")
		if fi >= len(parts):
			return None
		val = parts[fi]
		return None if val == "." else val

	def dosages(self) -> List[float]:
		"""Non-reference allele dosage per sample (NaN where GT is missing)."""
		return [gt_dosage(self.extract_sample_value(i, 'GT')) for i in range(len(self.sample_fields))]


class SimpleVCFReader:
	"""Minimal streaming VCF reader.

	Parameters
	----------
	path : str
		Path to (optionally gzipped) VCF file.
	max_records : int | None
		Optional limit for testing / faster prototyping.
	"""

	def __init__(self, path: str, max_records: Optional[int] = None):
		self.path = str(path)
		self.max_records = max_records
		self.samples: List[str] = []
		self.header_lines: List[str] = []

	# -- internal helpers -------------------------------------------------
	def _open(self):  # type: ignore[return-type]
		if self.path.endswith('.gz'):
			return gzip.open(self.path, 'rt')
		return open(self.path, 'rt')

	def parse(self) -> Iterator[GenotypeRecord]:
		count = 0
		header: List[str] = []
		with self._open() as fh:
			for line in fh:
				if not line:
					continue
				if line.startswith('##'):
					header.append(line.rstrip('\n'))
					continue
				if line.startswith('#CHROM'):
					header.append(line.rstrip('\n'))
					self.header_lines = header
					header_cols = line.rstrip().split('\t')
					# VCF fixed columns then samples from index 9
					self.samples = header_cols[9:]
					continue
				parts = line.rstrip().split('\t')
				if len(parts) < 10:  # no samples
					continue
				chrom, pos, vid, ref, alts = parts[:5]
				format_keys = parts[8].split(':')
				sample_fields = parts[9:]
				yield GenotypeRecord(chrom, pos, vid, ref, alts, format_keys, sample_fields, line.rstrip('\n'))
				count += 1
				if self.max_records and count >= self.max_records:
					break

	# -- matrix extraction ------------------------------------------------
	def extract_genotype_matrix(self, verbose: bool = True) -> GenotypeMatrix:
		"""Read every record into a :class:`GenotypeMatrix` of GT dosages."""
		rows: List[List[float]] = []
		site_rows = []
		for rec in self.parse():
			rows.append(rec.dosages())
			site_rows.append({
				'Chrom': rec.chrom,
				'Pos': int(rec.pos),
				'ID': rec.id,
				'Ref': rec.ref,
				'Alts': rec.alts,
			})
		sites = pd.DataFrame(site_rows, columns=SITE_COLUMNS)
		calls = np.array(rows, dtype=float).reshape(len(rows), len(self.samples))
		if verbose:
			print(f"[INFO] Extracted {len(rows):,} sites x {len(self.samples):,} samples from {self.path}")
		return GenotypeMatrix(calls, samples=self.samples, sites=sites)

	# -- filtered output --------------------------------------------------
	def write_filtered(
		self,
		keep: Union[GenotypeMatrix, np.ndarray, Sequence[bool]],
		output_path: str,
	) -> int:
		"""Write header lines plus the records selected by ``keep``.

		``keep`` is either a boolean mask over the records of this VCF or a
		(filtered) :class:`GenotypeMatrix` extracted from it. Output is
		gzip-compressed when ``output_path`` ends with ``.gz``. Returns the
		number of records written.
		"""
		if getattr(keep, 'is_genotype_matrix', False):
			keep = keep.kept_mask
		mask = np.asarray(keep, dtype=bool)
		output_path = str(output_path)
		opener = gzip.open if output_path.endswith('.gz') else open
		written = 0
		seen = 0
		with opener(output_path, 'wt') as out:
			header_done = False
			for rec in self.parse():
				if not header_done:
					for h in self.header_lines:
						out.write(h + '\n')
					header_done = True
				if seen >= mask.size:
					raise ValueError(f"Keep mask covers {mask.size} records but the VCF has more")
				if mask[seen]:
					out.write(rec.line + '\n')
					written += 1
				seen += 1
			if not header_done:
				for h in self.header_lines:
					out.write(h + '\n')
		if seen != mask.size:
			raise ValueError(f"Keep mask covers {mask.size} records but the VCF has {seen}")
		return written
