#!/usr/bin/env python3
"""
QC — Data object validation
CountMatrix, CountMatrixSource variants, validate_object, check_reference_codes
"""

from __future__ import annotations

from dataclasses import dataclass
from importlib.metadata import version as installed_version
from typing import Any, Optional

import anndata as ad
import pandas as pd

from ..adata_utils import is_empty_matrix
from ..config import (
    CURRENT_SCHEMA_VERSION,
    DEFAULT_MIN_SCHEMA_VERSION,
    NOMENCLATURE_ORGANISM,
    SCHEMA_VERSION_KEY,
    SUPPORTED_NOMENCLATURES,
    SUPPORTED_ORGANISMS,
)
from ..errors import (
    MissingAssayError,
    MissingMatrixError,
    UnsupportedNomenclatureError,
    UnsupportedObjectError,
    UnsupportedOrganismError,
    UnsupportedVersionError,
)
from ..utils import version_at_least, version_tuple

MIN_ANNDATA_VERSION = "0.8"


@dataclass(frozen=True)
class CountMatrix:
    """Cells × genes counts with their identifier indexes."""
    X: Any
    cells: pd.Index
    genes: pd.Index

    @property
    def n_cells(self) -> int:
        return len(self.cells)

    def to_anndata(self, dtype=None) -> ad.AnnData:
        """Bare AnnData around the matrix, for scanpy; cast to `dtype` when given."""
        X = self.X if dtype is None else self.X.astype(dtype)
        return ad.AnnData(
            X=X,
            obs=pd.DataFrame(index=self.cells.astype(str)),
            var=pd.DataFrame(index=self.genes.astype(str)),
        )


class CountMatrixSource:
    """Accessor for the count matrix of one storage slot."""
    slot: str = ""

    def __init__(self, adata: ad.AnnData):
        self.adata = adata

    def get_count_matrix(self) -> CountMatrix:
        raise NotImplementedError


class MainMatrixSource(CountMatrixSource):
    slot = "X"

    def get_count_matrix(self) -> CountMatrix:
        a = self.adata
        return CountMatrix(a.X, a.obs_names, a.var_names)


class LayerCountSource(CountMatrixSource):
    def __init__(self, adata: ad.AnnData, layer: str):
        super().__init__(adata)
        self.slot = layer

    def get_count_matrix(self) -> CountMatrix:
        a = self.adata
        return CountMatrix(a.layers[self.slot], a.obs_names, a.var_names)


class RawCountSource(CountMatrixSource):
    """`adata.raw`: shares obs with the object, keeps its own gene axis."""
    slot = "raw"

    def get_count_matrix(self) -> CountMatrix:
        raw = self.adata.raw
        return CountMatrix(raw.X, self.adata.obs_names, raw.var_names)


def schema_version(adata: ad.AnnData) -> str:
    """Schema version recorded on the object; objects without one are current."""
    v = adata.uns.get(SCHEMA_VERSION_KEY) if adata.uns is not None else None
    return str(v) if v is not None else CURRENT_SCHEMA_VERSION


def _require_matrix(X, what: str) -> None:
    if is_empty_matrix(X):
        raise MissingMatrixError(f"`counts` matrix could not be found in {what}.")


def _raw_source(adata: ad.AnnData) -> RawCountSource:
    if adata.raw is None:
        raise MissingMatrixError("`raw` matrix could not be found in provided AnnData object.")
    _require_matrix(adata.raw.X, "`raw` slot")
    return RawCountSource(adata)


def select_source(adata: ad.AnnData, assay: str, legacy: bool = False) -> CountMatrixSource:
    """
    Pick the accessor for `assay`. Legacy objects (schema < 3) only carry raw counts,
    so the requested slot is ignored for them.
    """
    if legacy:
        return _raw_source(adata)

    if assay == "X":
        _require_matrix(adata.X, "`X`")
        return MainMatrixSource(adata)
    if assay == "raw":
        return _raw_source(adata)
    if assay not in adata.layers.keys():
        raise MissingAssayError(
            f"Assay slot `{assay}` could not be found in provided AnnData object."
        )
    _require_matrix(adata.layers[assay], f"`{assay}` assay slot")
    return LayerCountSource(adata, assay)


def check_reference_codes(organism: str, gene_nomenclature: str) -> None:
    """Organism and nomenclature must come from the closed supported sets."""
    if organism not in SUPPORTED_ORGANISMS:
        raise UnsupportedOrganismError(
            f"User-specified organism ('{organism}') not in list of supported organisms: "
            + ", ".join(SUPPORTED_ORGANISMS)
        )
    if gene_nomenclature not in SUPPORTED_NOMENCLATURES:
        raise UnsupportedNomenclatureError(
            f"User-specified gene nomenclature ('{gene_nomenclature}') not in list of supported "
            "nomenclatures: " + ", ".join(SUPPORTED_NOMENCLATURES)
        )
    required = NOMENCLATURE_ORGANISM.get(gene_nomenclature)
    if required is not None and required != organism:
        raise UnsupportedNomenclatureError(
            f"Gene nomenclature '{gene_nomenclature}' is only available for organism "
            f"'{required}', not '{organism}'."
        )


def validate_object(
    adata: Any,
    assay: str = "X",
    min_version: Optional[str] = None,
) -> CountMatrixSource:
    """
    Check that `adata` can be used and return the accessor for its count matrix.

    Raises
    ------
    UnsupportedVersionError
        Installed anndata or the object's schema is older than supported.
    UnsupportedObjectError
        `adata` is not an AnnData.
    MissingAssayError, MissingMatrixError
        Storage slot or its matrix is absent/empty.
    """
    min_version = min_version or DEFAULT_MIN_SCHEMA_VERSION

    anndata_version = installed_version("anndata")
    if not version_at_least(anndata_version, MIN_ANNDATA_VERSION):
        raise UnsupportedVersionError(
            f"The installed anndata package is of version `{anndata_version}`, "
            f"but at least v{MIN_ANNDATA_VERSION} is required."
        )

    if not isinstance(adata, ad.AnnData):
        raise UnsupportedObjectError(
            f"Provided object is of class `{type(adata).__name__}` but must be of class 'AnnData'."
        )

    version = schema_version(adata)
    if not version_at_least(version, min_version):
        raise UnsupportedVersionError(
            f"Provided AnnData object has schema version `{version}` but must be at least {min_version}."
        )

    legacy = version_tuple(version)[0] < 3
    return select_source(adata, assay, legacy=legacy)
