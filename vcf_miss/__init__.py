"""vcf_miss – per-SNP missing data filtering for VCF genotype matrices.

Subpackages:
	io       – streaming VCF reader and the GenotypeMatrix container
	metrics  – site / sample missingness and completeness-grid summaries
	plot     – completeness summary, per-sample ridge and bar plots
	core     – ``missing_by_snp``, the explore / filter entry point

Typical use::

	from vcf_miss import SimpleVCFReader, missing_by_snp

	gm = SimpleVCFReader("input.vcf.gz").extract_genotype_matrix()
	summary = missing_by_snp(gm, output_dir="plots")        # explore
	filtered = missing_by_snp(gm, cutoff=0.8, output_dir="plots")
"""

from .core import missing_by_snp  # noqa: F401
from .exceptions import VcfMissError, InvalidInputError, InvalidCutoffError  # noqa: F401
from .io import SimpleVCFReader, GenotypeMatrix  # noqa: F401

__all__ = [
	"missing_by_snp",
	"SimpleVCFReader",
	"GenotypeMatrix",
	"VcfMissError",
	"InvalidInputError",
	"InvalidCutoffError",
]

__version__ = "0.1.0"
__author__ = "Zihao Huang"
__email__ = "zh384@cam.ac.uk"
__affiliation__ = "Department of Genetics, University of Cambridge"
