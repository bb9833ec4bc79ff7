#!/usr/bin/env python3
"""
QC — Reference gene lists
load_gene_table, GeneListResolver
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pandas as pd

from ..config import EXTDATA_DIR
from ..errors import MissingReferenceError
from .validate import check_reference_codes

logger = logging.getLogger(__name__)

GENE_KINDS = ("mt", "ribo")


def _strip_ens_version_series(s: pd.Series) -> pd.Series:
    """Remove Ensembl version suffixes like 'ENSG000001.12' → 'ENSG000001'."""
    return s.astype(str).str.replace(r"\.\d+$", "", regex=True)


@lru_cache(maxsize=None)
def _read_gene_table(path: str) -> Tuple[str, ...]:
    df = pd.read_csv(path, sep="\t", header=None, usecols=[0], dtype=str, compression="infer")
    genes = df.iloc[:, 0].dropna().str.strip()
    return tuple(genes[genes != ""])


def load_gene_table(path: str) -> List[str]:
    """
    Read a headerless, single-column (gzipped) TSV of gene identifiers.
    Results are cached per path; tables are never mutated after load.
    """
    return list(_read_gene_table(str(path)))


class GeneListResolver:
    """
    Load mitochondrial/ribosomal reference genes for an organism and nomenclature
    and intersect them with the genes of a data set.

    Parameters
    ----------
    reference_dir : str | Path | None
        Folder holding `genes_<kind>_<organism>_<nomenclature>.tsv.gz` tables.
        None → bundled extdata.
    """

    def __init__(self, reference_dir: Optional[str] = None):
        self.reference_dir = Path(reference_dir) if reference_dir else EXTDATA_DIR

    @staticmethod
    def _table_nomenclature(gene_nomenclature: str) -> str:
        # GENCODE IDs are versioned Ensembl IDs
        return "ensembl" if gene_nomenclature.startswith("gencode") else gene_nomenclature

    def table_path(self, kind: str, organism: str, gene_nomenclature: str) -> Path:
        nom = self._table_nomenclature(gene_nomenclature)
        return self.reference_dir / f"genes_{kind}_{organism}_{nom}.tsv.gz"

    def reference_genes(self, organism: str, gene_nomenclature: str) -> Dict[str, List[str]]:
        """Return {'mt': [...], 'ribo': [...]} straight from the reference tables."""
        check_reference_codes(organism, gene_nomenclature)
        out = {}
        for kind in GENE_KINDS:
            path = self.table_path(kind, organism, gene_nomenclature)
            if not path.is_file():
                raise MissingReferenceError(
                    f"Reference table for {kind} genes ({organism}, {gene_nomenclature}) "
                    f"not found: {path}"
                )
            out[kind] = load_gene_table(str(path))
        return out

    @staticmethod
    def genes_here(reference: List[str], genes: pd.Index, gene_nomenclature: str) -> List[str]:
        """
        Genes of `genes` that appear in `reference`, in the data set's order.
        For GENCODE, matching ignores the version suffix of the data set's IDs.
        """
        ref = set(reference)
        if gene_nomenclature.startswith("gencode"):
            keys = _strip_ens_version_series(pd.Series(genes, dtype=str))
            mask = keys.isin(ref).values
        else:
            mask = pd.Index(genes).astype(str).isin(ref)
        return [str(g) for g in pd.Index(genes)[mask]]

    def resolve(self, genes: pd.Index, organism: str, gene_nomenclature: str) -> Dict[str, List[str]]:
        """Return {'mt': genes_mt_here, 'ribo': genes_ribo_here}."""
        reference = self.reference_genes(organism, gene_nomenclature)
        resolved = {
            kind: self.genes_here(reference[kind], genes, gene_nomenclature)
            for kind in GENE_KINDS
        }
        logger.debug(
            "Resolved %d/%d mitochondrial and %d/%d ribosomal reference genes",
            len(resolved["mt"]), len(reference["mt"]),
            len(resolved["ribo"]), len(reference["ribo"]),
        )
        return resolved
