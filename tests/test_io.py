import gzip

import numpy as np
import pandas as pd
import pytest

from vcf_miss.io import GenotypeMatrix, SimpleVCFReader
from vcf_miss.utils import gt_dosage, gt_is_missing


@pytest.mark.parametrize(
    "gt,expected",
    [("0/0", 0.0), ("0/1", 1.0), ("1|0", 1.0), ("1/1", 2.0), ("1/2", 2.0), ("1", 1.0), ("0", 0.0)],
)
def test_gt_dosage(gt, expected):
    assert gt_dosage(gt) == expected


@pytest.mark.parametrize("gt", [None, "", ".", "./.", ".|.", "0/.", "./1"])
def test_gt_missing_calls(gt):
    assert gt_is_missing(gt)
    assert np.isnan(gt_dosage(gt))


def test_extract_genotype_matrix(vcf_path):
    gm = SimpleVCFReader(vcf_path).extract_genotype_matrix()
    assert gm.samples == ["S1", "S2", "S3", "S4"]
    assert gm.shape == (4, 4)
    np.testing.assert_array_equal(gm.calls[0], [0, 1, 2, 1])
    assert np.isnan(gm.calls[1, 1])
    assert np.isnan(gm.calls[2]).sum() == 3
    assert np.isnan(gm.calls[3, 0])
    assert gm.calls[3, 1] == 2
    sites = gm.sites
    assert sites["ID"].tolist() == ["rs1", "rs2", "rs3", "rs4"]
    assert sites["Pos"].tolist() == [100, 200, 300, 400]


def test_gzipped_vcf_matches_plain(vcf_path, vcf_gz_path):
    plain = SimpleVCFReader(vcf_path).extract_genotype_matrix()
    packed = SimpleVCFReader(vcf_gz_path).extract_genotype_matrix()
    np.testing.assert_array_equal(plain.calls, packed.calls)


def test_max_records(vcf_path):
    gm = SimpleVCFReader(vcf_path, max_records=2).extract_genotype_matrix()
    assert gm.n_sites == 2


def test_write_filtered_from_matrix(vcf_path, tmp_path):
    reader = SimpleVCFReader(vcf_path)
    gm = reader.extract_genotype_matrix()
    kept = gm.subset_sites([True, False, True, True]).subset_sites([True, True, False])
    out = tmp_path / "filtered.vcf"
    assert reader.write_filtered(kept, out) == 2
    lines = out.read_text().splitlines()
    assert lines[0] == "##fileformat=VCFv4.2"
    assert lines[3].startswith("#CHROM")
    body = [line.split("\t")[2] for line in lines if not line.startswith("#")]
    assert body == ["rs1", "rs3"]


def test_write_filtered_gzip(vcf_path, tmp_path):
    reader = SimpleVCFReader(vcf_path)
    out = tmp_path / "filtered.vcf.gz"
    reader.write_filtered(np.array([False, True, False, False]), out)
    with gzip.open(out, "rt") as fh:
        records = [line for line in fh if not line.startswith("#")]
    assert len(records) == 1
    assert records[0].split("\t")[2] == "rs2"


def test_write_filtered_rejects_wrong_mask_length(vcf_path, tmp_path):
    reader = SimpleVCFReader(vcf_path)
    with pytest.raises(ValueError):
        reader.write_filtered([True, True], tmp_path / "short.vcf")
    with pytest.raises(ValueError):
        reader.write_filtered([True] * 5, tmp_path / "long.vcf")


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        SimpleVCFReader(tmp_path / "absent.vcf").extract_genotype_matrix()


def test_genotype_matrix_defaults_and_none():
    gm = GenotypeMatrix([[0, None], [1, 2]])
    assert gm.samples == ["sample_1", "sample_2"]
    assert gm.sites["ID"].tolist() == ["site_1", "site_2"]
    assert np.isnan(gm.calls[0, 1])


def test_genotype_matrix_is_read_only():
    gm = GenotypeMatrix([[0, 1]])
    with pytest.raises(ValueError):
        gm.calls[0, 0] = 5


def test_genotype_matrix_validates_shapes():
    with pytest.raises(ValueError):
        GenotypeMatrix([[0, 1]], samples=["only_one"])
    with pytest.raises(ValueError):
        GenotypeMatrix([[0, 1]], sites=pd.DataFrame({"ID": ["a", "b"]}))
    with pytest.raises(ValueError):
        GenotypeMatrix([[[0]]])


def test_subset_sites_tracks_source_rows():
    gm = GenotypeMatrix(np.arange(10, dtype=float).reshape(5, 2))
    first = gm.subset_sites([True, False, True, True, False])
    second = first.subset_sites([False, True, True])
    assert second.kept_mask.tolist() == [False, False, True, True, False]
    np.testing.assert_array_equal(second.calls[:, 0], [4, 6])
    assert gm.n_sites == 5


def test_to_frame():
    frame = GenotypeMatrix([[0, np.nan]], samples=["a", "b"]).to_frame()
    assert frame.columns.tolist() == ["a", "b"]
    assert frame.index.tolist() == ["site_1"]


def test_extract_genotype_matrix_verbose_flag(vcf_path, capsys):
    SimpleVCFReader(vcf_path).extract_genotype_matrix()
    assert "[INFO] Extracted 4 sites x 4 samples" in capsys.readouterr().out
    SimpleVCFReader(vcf_path).extract_genotype_matrix(verbose=False)
    assert capsys.readouterr().out == ""
