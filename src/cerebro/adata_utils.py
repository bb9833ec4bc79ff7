# src/cerebro/adata_utils.py
from __future__ import annotations
from pathlib import Path

import anndata as ad
import numpy as np
from scipy import sparse


def read_h5ad(path: str) -> ad.AnnData:
    """Read a single .h5ad and return an AnnData."""
    if not Path(path).is_file():
        raise FileNotFoundError(f"H5AD file not found: {path}")
    return ad.read_h5ad(path)


def write_h5ad(adata: ad.AnnData, path: str) -> str:
    """Write `adata` to `path`, creating parent folders. Returns the path."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    adata.write_h5ad(out)
    return str(out)


def matrix_format(X) -> str:
    """Short description of a matrix container, e.g. 'sparse csr (float32)'."""
    if X is None:
        return "none"
    if sparse.issparse(X):
        return f"sparse {X.format} ({X.dtype})"
    if isinstance(X, np.ndarray):
        return f"dense ({X.dtype})"
    dtype = getattr(X, "dtype", None)
    return f"{type(X).__name__} ({dtype})" if dtype is not None else type(X).__name__


def is_empty_matrix(X) -> bool:
    """True for None or a matrix with zero rows or columns."""
    if X is None:
        return True
    shape = getattr(X, "shape", None)
    if shape is None or len(shape) != 2:
        return True
    return shape[0] == 0 or shape[1] == 0
