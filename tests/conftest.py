import gzip

import anndata as ad
import numpy as np
import pandas as pd
import pytest


def write_table(path, genes):
    with gzip.open(path, "wt") as f:
        f.write("\n".join(genes) + "\n")
    return path


def make_adata(X, genes, cells=None):
    X = np.asarray(X, dtype=np.float32)
    cells = cells or [f"cell{i}" for i in range(X.shape[0])]
    return ad.AnnData(
        X=X,
        obs=pd.DataFrame(index=pd.Index(cells, dtype=str)),
        var=pd.DataFrame(index=pd.Index(genes, dtype=str)),
    )


@pytest.fixture
def small_adata():
    # genes × cells: A=[10,0], B=[10,10], C=[0,10]
    return make_adata([[10, 10, 0], [0, 10, 10]], ["A", "B", "C"], ["c1", "c2"])


@pytest.fixture
def ref_dir(tmp_path):
    d = tmp_path / "ref"
    d.mkdir()
    write_table(d / "genes_mt_hg_name.tsv.gz", ["A", "Z"])
    write_table(d / "genes_ribo_hg_name.tsv.gz", ["C"])
    write_table(d / "genes_mt_mm_name.tsv.gz", ["mt-Q"])
    write_table(d / "genes_ribo_mm_name.tsv.gz", ["Rpl9"])
    write_table(d / "genes_mt_hg_ensembl.tsv.gz", ["ENSG3", "ENSG1"])
    write_table(d / "genes_ribo_hg_ensembl.tsv.gz", ["ENSG2"])
    return str(d)
