"""Exceptions raised by the vcf_miss package."""

__all__ = ["VcfMissError", "InvalidInputError", "InvalidCutoffError"]


class VcfMissError(Exception):
	"""Base class for vcf_miss errors."""


class InvalidInputError(VcfMissError, TypeError):
	"""Input is not a recognised genotype-matrix container."""


class InvalidCutoffError(VcfMissError, ValueError):
	"""Cutoff is not a number or lies outside [0, 1]."""
