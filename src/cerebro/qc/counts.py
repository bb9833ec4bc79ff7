#!/usr/bin/env python3
"""
QC — Transcript and gene counts per cell
add_transcript_counts
"""

from __future__ import annotations

import logging

import anndata as ad
import scanpy as sc

from .validate import validate_object

logger = logging.getLogger(__name__)


def add_transcript_counts(adata: ad.AnnData, assay: str = "X") -> ad.AnnData:
    """
    Add `nUMI` (total counts) and `nGene` (genes with non-zero counts) to `adata.obs`,
    computed with scanpy on the chosen storage slot.
    """
    counts = validate_object(adata, assay=assay).get_count_matrix()

    # scanpy needs an AnnData; wrap the slot so the caller's var/layers stay untouched
    tmp = counts.to_anndata()
    obs_metrics, _ = sc.pp.calculate_qc_metrics(
        tmp, percent_top=None, log1p=False, inplace=False
    )

    adata.obs["nUMI"] = obs_metrics["total_counts"].reindex(adata.obs_names).values
    adata.obs["nGene"] = obs_metrics["n_genes_by_counts"].reindex(adata.obs_names).values
    logger.info(f"Added nUMI/nGene for {adata.n_obs:,} cells from slot '{assay}'")
    return adata
