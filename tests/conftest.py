import gzip

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pytest  # noqa: E402

from vcf_miss import GenotypeMatrix  # noqa: E402

VCF_TEXT = """\
##fileformat=VCFv4.2
##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">
##FORMAT=<ID=DP,Number=1,Type=Integer,Description="Read depth">
#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tS1\tS2\tS3\tS4
chr1\t100\trs1\tA\tG\t50\tPASS\t.\tGT:DP\t0/0:10\t0/1:12\t1/1:8\t0|1:9
chr1\t200\trs2\tC\tT\t50\tPASS\t.\tGT\t0/0\t./.\t0/1\t1/1
chr1\t300\trs3\tG\tA\t50\tPASS\t.\tGT\t./.\t./.\t0/1\t.
chr1\t400\trs4\tT\tC,G\t50\tPASS\t.\tGT:DP\t0/.\t1/2:5\t0/0:3\t0/0:4
"""


@pytest.fixture
def vcf_path(tmp_path):
    path = tmp_path / "toy.vcf"
    path.write_text(VCF_TEXT)
    return path


@pytest.fixture
def vcf_gz_path(tmp_path):
    path = tmp_path / "toy.vcf.gz"
    with gzip.open(path, "wt") as fh:
        fh.write(VCF_TEXT)
    return path


@pytest.fixture
def example_matrix():
    """4 sites x 2 samples with site missingness [0, 0.5, 0.5, 1]."""
    return GenotypeMatrix(
        [[0, 1], [np.nan, 2], [1, np.nan], [np.nan, np.nan]],
        samples=["A", "B"],
    )


@pytest.fixture
def no_complete_matrix():
    """Every site has at least one missing call."""
    return GenotypeMatrix(
        [[np.nan, 1, 0], [0, np.nan, 2], [np.nan, np.nan, 1]],
        samples=["A", "B", "C"],
    )


@pytest.fixture(autouse=True)
def shown(monkeypatch):
    """Record plt.show() calls instead of opening windows."""
    calls = []
    monkeypatch.setattr(plt, "show", lambda *args, **kwargs: calls.append(plt.get_fignums()))
    return calls
