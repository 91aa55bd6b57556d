"""Small utility helpers used across the vcf_miss package.

This module intentionally keeps a tiny surface area of pure-Python helpers that
are easy to unit-test and have no heavy dependencies.
"""
from typing import Optional


def gt_is_missing(gt: Optional[str]) -> bool:
    """Check if a genotype is missing or half-missing.

    Treat '.', './.', '.|.', '0/.', './1', '0|.' etc. as missing.
    This follows the VCF specification for missing genotypes.
    """
    if gt is None or gt == "":
        return True
    if gt == '.':
        return True
    return '.' in gt


def split_alleles(gt: str) -> list:
    """Split a GT string on its phasing separator ('/' or '|')."""
    sep = '/' if '/' in gt else '|' if '|' in gt else None
    return gt.split(sep) if sep else [gt]


def gt_dosage(gt: Optional[str]) -> float:
    """Convert a GT string into a non-reference allele dosage.

    Examples: '0/0' -> 0, '0|1' -> 1, '1/1' -> 2, '1/2' -> 2, '1' -> 1.
    Missing (or partially missing) calls and unparseable alleles give NaN.
    """
    if gt_is_missing(gt):
        return float("nan")
    dosage = 0
    for a in split_alleles(gt):
        if not a.isdigit():
            return float("nan")
        if int(a) > 0:
            dosage += 1
    return float(dosage)


__all__ = [
    "gt_is_missing",
    "split_alleles",
    "gt_dosage",
]
