"""Core filtering routines."""

from .snp_filter import missing_by_snp, is_genotype_container  # noqa: F401

__all__ = ["missing_by_snp", "is_genotype_container"]
