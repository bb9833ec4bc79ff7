#!/usr/bin/env python3
"""
cerebro.config

Contains:
- USER_DEFAULTS: baseline defaults for CLI & drivers
- supported organisms / nomenclatures and the schema-version floor
- DEFAULT_CEREBRO_OPTIONS: dashboard option keys and their defaults
- resolve_paths(args): expand user paths, normalize relative ones
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional


# -------------------------------------------------------------
# Default user-configurable parameters (used by CLI & drivers)
# -------------------------------------------------------------
# Central defaults used by the CLI. Make sure EVERY key the CLI reads exists here.
USER_DEFAULTS = {
    # Inputs
    "h5ad": "",
    "assay": "X",                 # X | raw | <layer name>
    "organism": "hg",             # hg | mm
    "gene_nomenclature": "name",  # name | ensembl | gencode_v27 | gencode_vM16
    "reference_dir": "",          # "" means bundled extdata/
    "min_version": "3",

    # Outputs
    "out_h5ad": "",               # "" means <stem>_qc.h5ad next to the input
}

# -------------------------------------------------------------
# Closed sets checked by the validator
# -------------------------------------------------------------
SUPPORTED_ORGANISMS = ("hg", "mm")
SUPPORTED_NOMENCLATURES = ("name", "ensembl", "gencode_v27", "gencode_vM16")

# GENCODE releases are organism specific
NOMENCLATURE_ORGANISM = {
    "gencode_v27": "hg",
    "gencode_vM16": "mm",
}

DEFAULT_MIN_SCHEMA_VERSION = "3"
CURRENT_SCHEMA_VERSION = "3.0"
SCHEMA_VERSION_KEY = "schema_version"

GENE_LISTS_KEY = "gene_lists"
PERCENT_MT_COL = "percent_mt"
PERCENT_RIBO_COL = "percent_ribo"

# Bundled reference tables live next to the package modules
EXTDATA_DIR = Path(__file__).resolve().with_name("extdata")

# -------------------------------------------------------------
# Dashboard options (keys a user may override)
# -------------------------------------------------------------
DEFAULT_CEREBRO_OPTIONS: Dict[str, Any] = {
    "crb_file_to_load": None,
    "example_file": None,
    "overview_default_point_size": 2,
    "gene_expression_default_point_size": 2,
    "overview_default_point_opacity": 1.0,
    "gene_expression_default_point_opacity": 1.0,
    "overview_default_percentage_cells_to_show": 100,
    "gene_expression_default_percentage_cells_to_show": 100,
    "projections_show_hover_info": True,
}


# -------------------------------------------------------------
# Helper: normalize and expand paths
# -------------------------------------------------------------
def _expand_path(p: Optional[str]) -> Optional[str]:
    """Expand ~ and make absolute, or None if blank."""
    if p is None:
        return None
    p = str(p).strip()
    if not p:
        return None
    path = Path(p).expanduser()
    return str(path if path.is_absolute() else path.resolve())


def resolve_paths(args: Any) -> Dict[str, Optional[str]]:
    """
    Normalize all input/output paths in a CLI namespace or dict.

    Works with argparse.Namespace or plain dict.
    Returns a dict of resolved absolute paths (None for blank entries).
    """
    if hasattr(args, "__dict__"):
        items = vars(args)
    elif isinstance(args, dict):
        items = args
    else:
        raise TypeError("resolve_paths() expects dict or argparse.Namespace")

    keys = ["h5ad", "out_h5ad", "reference_dir"]
    resolved = {}
    for k in keys:
        resolved[k] = _expand_path(items.get(k))
    return resolved


# -------------------------------------------------------------
# Optional: run as script to print defaults
# -------------------------------------------------------------
if __name__ == "__main__":
    import json
    print(json.dumps(USER_DEFAULTS, indent=2))
