"""I/O subpackage.

Exposes a lightweight streaming VCF reader and the in-memory
``GenotypeMatrix`` it produces. Swap / extend with high-performance
parsers as required.
"""

from .genotype_matrix import GenotypeMatrix  # noqa: F401
from .vcf_reader import SimpleVCFReader, GenotypeRecord  # noqa: F401

__all__ = ["SimpleVCFReader", "GenotypeRecord", "GenotypeMatrix"]
