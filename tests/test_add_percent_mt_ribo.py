import numpy as np
import pandas as pd
import pytest

from cerebro.errors import MissingAssayError, UnsupportedOrganismError
from cerebro.qc.counts import add_transcript_counts
from cerebro.qc.run import add_percent_mt_ribo

from conftest import make_adata


def test_adds_columns_and_gene_lists(small_adata, ref_dir):
    out = add_percent_mt_ribo(small_adata, organism="hg", gene_nomenclature="name", reference_dir=ref_dir)
    assert out is small_adata
    assert out.obs["percent_mt"].tolist() == [50.0, 0.0]
    assert out.obs["percent_ribo"].tolist() == [0.0, 50.0]
    assert out.uns["gene_lists"]["mitochondrial_genes"] == ["A"]
    assert out.uns["gene_lists"]["ribosomal_genes"] == ["C"]


def test_no_mito_genes_found(ref_dir):
    adata = make_adata([[1, 2], [3, 4], [0, 5]], ["B", "C"])
    add_percent_mt_ribo(adata, organism="hg", gene_nomenclature="name", reference_dir=ref_dir)
    assert adata.obs["percent_mt"].tolist() == [0.0, 0.0, 0.0]
    assert adata.uns["gene_lists"]["mitochondrial_genes"] == "no_mitochondrial_genes_found"
    assert adata.uns["gene_lists"]["ribosomal_genes"] == ["C"]


def test_no_ribo_genes_found(small_adata, ref_dir):
    add_percent_mt_ribo(small_adata, organism="mm", gene_nomenclature="name", reference_dir=ref_dir)
    assert small_adata.obs["percent_ribo"].tolist() == [0.0, 0.0]
    assert small_adata.uns["gene_lists"]["ribosomal_genes"] == "no_ribosomal_genes_found"


def test_unsupported_organism_leaves_object_untouched(small_adata, ref_dir):
    obs_before = small_adata.obs.copy()
    with pytest.raises(UnsupportedOrganismError):
        add_percent_mt_ribo(small_adata, organism="xx", gene_nomenclature="name", reference_dir=ref_dir)
    pd.testing.assert_frame_equal(small_adata.obs, obs_before)
    assert "gene_lists" not in small_adata.uns


def test_missing_assay_leaves_object_untouched(small_adata, ref_dir):
    with pytest.raises(MissingAssayError):
        add_percent_mt_ribo(small_adata, assay="RNA", reference_dir=ref_dir)
    assert "percent_mt" not in small_adata.obs
    assert "gene_lists" not in small_adata.uns


def test_idempotent(small_adata, ref_dir):
    add_percent_mt_ribo(small_adata, reference_dir=ref_dir)
    first = small_adata.obs[["percent_mt", "percent_ribo"]].to_numpy().tobytes()
    add_percent_mt_ribo(small_adata, reference_dir=ref_dir)
    second = small_adata.obs[["percent_mt", "percent_ribo"]].to_numpy().tobytes()
    assert first == second


def test_overwrites_existing_columns_and_keeps_other_lists(small_adata, ref_dir):
    small_adata.obs["percent_mt"] = [99.0, 99.0]
    small_adata.uns["gene_lists"] = {"S_phase_genes": ["MCM5"]}
    add_percent_mt_ribo(small_adata, reference_dir=ref_dir)
    assert small_adata.obs["percent_mt"].tolist() == [50.0, 0.0]
    assert small_adata.uns["gene_lists"]["S_phase_genes"] == ["MCM5"]


def test_counts_from_layer(small_adata, ref_dir):
    small_adata.layers["counts"] = np.array([[1, 1, 2], [4, 0, 0]], dtype=np.float32)
    add_percent_mt_ribo(small_adata, assay="counts", reference_dir=ref_dir)
    assert small_adata.obs["percent_mt"].tolist() == [25.0, 100.0]
    assert small_adata.obs["percent_ribo"].tolist() == [50.0, 0.0]


def test_raw_counts_with_extra_genes(ref_dir):
    full = make_adata([[10, 10, 0, 5], [0, 10, 10, 5]], ["A", "B", "C", "D"], ["c1", "c2"])
    adata = full[:, ["B", "C"]].copy()
    adata.raw = full
    add_percent_mt_ribo(adata, assay="raw", reference_dir=ref_dir)
    assert adata.obs["percent_mt"].tolist() == [40.0, 0.0]
    assert adata.uns["gene_lists"]["mitochondrial_genes"] == ["A"]


def test_bundled_tables_for_symbols():
    adata = make_adata([[5, 5, 10], [0, 10, 10]], ["MT-CO1", "RPL13", "GAPDH"])
    add_percent_mt_ribo(adata, organism="hg", gene_nomenclature="name")
    assert adata.obs["percent_mt"].tolist() == [25.0, 0.0]
    assert adata.obs["percent_ribo"].tolist() == [25.0, 50.0]


def test_add_transcript_counts(small_adata):
    add_transcript_counts(small_adata)
    assert small_adata.obs["nUMI"].tolist() == [20.0, 20.0]
    assert small_adata.obs["nGene"].tolist() == [2, 2]
