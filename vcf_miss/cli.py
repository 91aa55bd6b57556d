"""Command line interface for vcf_miss.

Current subcommands:
	snp    – per-SNP missing data plots; with --cutoff also write a filtered VCF
	sample – per-sample missing data table and bar plot

Example:
	python -m vcf_miss.cli snp --vcf input.vcf.gz --out outdir
	python -m vcf_miss.cli snp --vcf input.vcf.gz --out outdir --cutoff 0.8
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .core import missing_by_snp
from .exceptions import VcfMissError
from .io import SimpleVCFReader
from .metrics import sample_missingness
from .plot import plot_missing_rate_per_sample


def cmd_snp(args: argparse.Namespace) -> int:
	outdir = Path(args.out)
	outdir.mkdir(parents=True, exist_ok=True)

	reader = SimpleVCFReader(args.vcf, max_records=args.max_site)
	gm = reader.extract_genotype_matrix(verbose=not args.quiet)
	result = missing_by_snp(gm, cutoff=args.cutoff, output_dir=outdir, show=False, verbose=not args.quiet)

	if args.cutoff is None:
		# degenerate input yields the per-sample table instead of the summary
		name = 'snp_completeness_summary.tsv' if 'snps_retained' in result.columns else 'sample_missingness.tsv'
		result.to_csv(outdir / name, sep='\t', index=False)
		print(f"Missing data summary written to {outdir / name}")
		return 0

	out_vcf = Path(args.write_vcf) if args.write_vcf else outdir / 'filtered.vcf.gz'
	written = reader.write_filtered(result, out_vcf)
	print(f"{written:,} of {gm.n_sites:,} sites written to {out_vcf}")
	return 0


def cmd_sample(args: argparse.Namespace) -> int:
	outdir = Path(args.out)
	outdir.mkdir(parents=True, exist_ok=True)

	reader = SimpleVCFReader(args.vcf, max_records=args.max_site)
	gm = reader.extract_genotype_matrix()
	table = sample_missingness(gm.calls, gm.samples)
	table.to_csv(outdir / 'sample_missingness.tsv', sep='\t', index=False)
	plot_missing_rate_per_sample(table, output_path=str(outdir / 'sample_missing_rate.png'))
	print(f"Sample-level missingness written to {outdir}")
	return 0


def build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(prog="vcf_miss", description="Per-SNP missing data filtering for VCF files")
	sub = p.add_subparsers(dest="command")
	sp = sub.add_parser("snp", help="Per-SNP missing data plots and completeness filtering")
	sp.add_argument("--vcf", required=True, help="Input VCF or VCF.GZ file")
	sp.add_argument("--out", required=True, help="Output directory for plots and tables")
	sp.add_argument("--cutoff", type=float, default=None, help="Minimum proportion of samples genotyped for a SNP to be kept (0-1). Omit to only explore.")
	sp.add_argument("--write-vcf", default=None, help="Filtered VCF path (default: <out>/filtered.vcf.gz); used with --cutoff")
	sp.add_argument("--max-site", type=int, default=None, help="Limit number of variant sites parsed (debug)")
	sp.add_argument("--quiet", action="store_true", help="Suppress diagnostic messages")
	sp.set_defaults(func=cmd_snp)

	sp2 = sub.add_parser("sample", help="Per-sample missing data table and plot")
	sp2.add_argument("--vcf", required=True, help="Input VCF or VCF.GZ file")
	sp2.add_argument("--out", required=True, help="Output directory for plots and tables")
	sp2.add_argument("--max-site", type=int, default=None, help="Limit number of variant sites parsed (debug)")
	sp2.set_defaults(func=cmd_sample)
	return p


def main(argv=None):
	parser = build_parser()
	args = parser.parse_args(argv)
	if not hasattr(args, 'func'):
		parser.print_help()
		return 1
	try:
		return args.func(args)
	except VcfMissError as exc:
		print(f"[ERROR] {exc}", file=sys.stderr)
		return 2


if __name__ == "__main__":  # pragma: no cover
	sys.exit(main())
