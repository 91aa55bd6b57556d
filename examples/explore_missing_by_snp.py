"""Debug script to explore SNP missingness and try a few cutoffs.

Usage (adjust path):
    PYTHONPATH=.. python3 examples/explore_missing_by_snp.py \
        --vcf input.vcf.gz --outdir missing_plots --cutoff 0.7 --cutoff 0.9
"""
from __future__ import annotations

import argparse
from pathlib import Path

from vcf_miss import SimpleVCFReader, missing_by_snp


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--vcf", required=True, help="Input VCF(.gz)")
    ap.add_argument("--outdir", required=True, help="Output directory for plots")
    ap.add_argument("--cutoff", type=float, action="append", default=[], help="Cutoff to try (repeatable)")
    ap.add_argument("--max-records", type=int, default=None, help="Limit records (debug)")
    args = ap.parse_args()

    outdir = Path(args.outdir)
    gm = SimpleVCFReader(args.vcf, max_records=args.max_records).extract_genotype_matrix()

    summary = missing_by_snp(gm, output_dir=outdir / "explore", show=False)
    print(summary.to_string(index=False))

    for cutoff in args.cutoff:
        filtered = missing_by_snp(gm, cutoff=cutoff, output_dir=outdir / f"cutoff_{cutoff:g}", show=False)
        print(f"cutoff {cutoff:g}: {filtered.n_sites:,} of {gm.n_sites:,} sites kept")


if __name__ == "__main__":
    main()
