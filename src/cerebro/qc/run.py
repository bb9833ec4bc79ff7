#!/usr/bin/env python3
"""
QC — Entrypoint
add_percent_mt_ribo
"""
from __future__ import annotations

import logging
from typing import Optional

import anndata as ad
import numpy as np
import pandas as pd

from ..config import PERCENT_MT_COL, PERCENT_RIBO_COL
from .genes import GeneListResolver
from .merge import record_gene_list, merge_percentages
from .percent import percent_of_genes
from .validate import CountMatrix, check_reference_codes, validate_object

logger = logging.getLogger(__name__)

_LABELS = {"mt": "mitochondrial", "ribo": "ribosomal"}


def _percent_for(kind: str, counts: CountMatrix, genes_here) -> pd.Series:
    label = _LABELS[kind]
    if not genes_here:
        logger.info(f"No {label} genes found in data set.")
        return pd.Series(np.zeros(counts.n_cells, dtype=np.float64), index=counts.cells)
    logger.info(
        f"Calculate percentage of {len(genes_here)} {label} transcript(s) present in the data set..."
    )
    return percent_of_genes(counts, genes_here)


def add_percent_mt_ribo(
    adata: ad.AnnData,
    assay: str = "X",
    organism: str = "hg",
    gene_nomenclature: str = "name",
    reference_dir: Optional[str] = None,
    min_version: Optional[str] = None,
    resolver: Optional[GeneListResolver] = None,
) -> ad.AnnData:
    """
    Add the percentage of mitochondrial and ribosomal transcripts per cell.

    Parameters
    ----------
    adata : AnnData
        Caller-owned object; updated in place and returned.
    assay : str
        Slot to pull counts from: 'X', 'raw' or a layer name.
    organism : {'hg', 'mm'}
    gene_nomenclature : {'name', 'ensembl', 'gencode_v27', 'gencode_vM16'}
        How genes are identified in the data set.
    reference_dir : str | None
        Folder with reference gene tables; None → bundled tables.
    min_version : str | None
        Minimum accepted schema version (default '3').
    resolver : GeneListResolver | None
        Pre-built resolver; takes precedence over `reference_dir`.

    Returns
    -------
    AnnData
        Same object with obs['percent_mt'], obs['percent_ribo'] and
        uns['gene_lists']['mitochondrial_genes' / 'ribosomal_genes'].

    Notes
    -----
    All checks (object, slot, organism, nomenclature, reference tables) run before
    anything is written, so a failure leaves `adata` untouched.
    """
    source = validate_object(adata, assay=assay, min_version=min_version)
    check_reference_codes(organism, gene_nomenclature)

    counts = source.get_count_matrix()
    resolver = resolver or GeneListResolver(reference_dir)
    genes_here = resolver.resolve(counts.genes, organism, gene_nomenclature)

    values = {
        PERCENT_MT_COL: _percent_for("mt", counts, genes_here["mt"]),
        PERCENT_RIBO_COL: _percent_for("ribo", counts, genes_here["ribo"]),
    }

    for kind in ("mt", "ribo"):
        record_gene_list(adata, kind, genes_here[kind])
    return merge_percentages(adata, values)
