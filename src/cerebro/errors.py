# src/cerebro/errors.py
"""
Exception types raised by the QC pipeline and the dashboard state layer.

Every validation failure derives from ValidationError (itself a ValueError),
so callers can catch the whole family with one clause.
"""

from __future__ import annotations


class ValidationError(ValueError):
    """Input object or arguments failed a pre-computation check."""


class UnsupportedObjectError(ValidationError):
    """Provided object is not an AnnData."""


class UnsupportedVersionError(ValidationError):
    """Object schema (or installed anndata) is older than the minimum."""


class MissingAssayError(ValidationError):
    """Requested storage slot does not exist on the object."""


class MissingMatrixError(ValidationError):
    """Storage slot exists but holds no usable count matrix."""


class UnsupportedOrganismError(ValidationError):
    pass


class UnsupportedNomenclatureError(ValidationError):
    pass


class MissingReferenceError(ValidationError):
    """Reference gene table for a supported combination is not on disk."""


class NoDataSetError(RuntimeError):
    """Dashboard value requested before a data set was loaded."""


__all__ = [
    "ValidationError",
    "UnsupportedObjectError",
    "UnsupportedVersionError",
    "MissingAssayError",
    "MissingMatrixError",
    "UnsupportedOrganismError",
    "UnsupportedNomenclatureError",
    "MissingReferenceError",
    "NoDataSetError",
]
