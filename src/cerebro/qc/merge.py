#!/usr/bin/env python3
"""
QC — Write results back onto the AnnData
record_gene_list, merge_percentages
"""

from __future__ import annotations

from typing import List, Mapping

import anndata as ad
import numpy as np
import pandas as pd

from ..config import GENE_LISTS_KEY

GENE_LIST_KEYS = {
    "mt": "mitochondrial_genes",
    "ribo": "ribosomal_genes",
}
NOT_FOUND_SENTINELS = {
    "mt": "no_mitochondrial_genes_found",
    "ribo": "no_ribosomal_genes_found",
}


def record_gene_list(adata: ad.AnnData, kind: str, genes_here: List[str]) -> None:
    """Store the genes used for `kind` in uns['gene_lists'], or the 'none found' sentinel."""
    if GENE_LISTS_KEY not in adata.uns or adata.uns[GENE_LISTS_KEY] is None:
        adata.uns[GENE_LISTS_KEY] = {}
    adata.uns[GENE_LISTS_KEY][GENE_LIST_KEYS[kind]] = (
        list(genes_here) if genes_here else NOT_FOUND_SENTINELS[kind]
    )


def merge_percentages(adata: ad.AnnData, values: Mapping[str, pd.Series]) -> ad.AnnData:
    """
    Write per-cell Series into adata.obs under their mapping keys.
    Values are matched to obs rows by cell barcode; existing columns are overwritten.
    """
    for col, series in values.items():
        aligned = series.reindex(adata.obs_names)
        adata.obs[col] = aligned.to_numpy(dtype=np.float64)
    return adata
