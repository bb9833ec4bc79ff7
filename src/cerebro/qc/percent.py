#!/usr/bin/env python3
"""
QC — Percentage of transcripts from gene subsets
percent_of_genes, calculate_percent_genes
"""

from __future__ import annotations

from typing import Dict, Iterable, Mapping

import anndata as ad
import numpy as np
import pandas as pd
import scanpy as sc

from .validate import CountMatrix, validate_object

SUBSET_KEY = "gene_subset"


def percent_of_genes(counts: CountMatrix, genes: Iterable[str]) -> pd.Series:
    """
    100 * (counts of `genes`) / (counts of all genes), per cell, in float64.

    Computed with scanpy's `qc_vars` on a float64 copy of the slot. Genes absent
    from the matrix are ignored. An empty subset gives zeros without touching the
    matrix. Cells with a total of zero get 0.0 (scanpy reports NaN there).
    """
    in_subset = np.asarray(counts.genes.astype(str).isin(set(map(str, genes))))
    if not in_subset.any():
        return pd.Series(np.zeros(counts.n_cells, dtype=np.float64), index=counts.cells)

    tmp = counts.to_anndata(dtype=np.float64)
    tmp.var[SUBSET_KEY] = in_subset
    obs_metrics, _ = sc.pp.calculate_qc_metrics(
        tmp, qc_vars=[SUBSET_KEY], percent_top=None, log1p=False, inplace=False
    )
    pct = obs_metrics[f"pct_counts_{SUBSET_KEY}"].to_numpy(dtype=np.float64)
    values = np.nan_to_num(pct, nan=0.0, posinf=0.0, neginf=0.0)
    return pd.Series(values, index=counts.cells, dtype=np.float64)


def calculate_percent_genes(
    adata: ad.AnnData,
    genes: Mapping[str, Iterable[str]],
    assay: str = "X",
) -> Dict[str, pd.Series]:
    """
    Percentage of transcripts coming from each named gene list, per cell.

    Parameters
    ----------
    adata : AnnData
        Object to read counts from; it is not modified.
    genes : mapping
        Subset name → gene identifiers, e.g. {"genes_mt": ["MT-CO1", ...]}.
    assay : str
        'X', 'raw' or a layer name.

    Returns
    -------
    dict[str, pandas.Series]
        One float64 Series per subset, indexed by cell barcode.
    """
    counts = validate_object(adata, assay=assay).get_count_matrix()
    return {name: percent_of_genes(counts, subset) for name, subset in genes.items()}
