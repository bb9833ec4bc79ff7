# src/cerebro/cli.py
from __future__ import annotations

import argparse
import json
import logging
import sys

from .config import SUPPORTED_NOMENCLATURES, SUPPORTED_ORGANISMS, USER_DEFAULTS, resolve_paths
from .errors import ValidationError
from .utils import default_output_path


def _D(key: str, fallback):
    """pull from USER_DEFAULTS with a safe fallback"""
    return USER_DEFAULTS.get(key, fallback)


def _parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        "cerebro-qc",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        description="Add percentage of mitochondrial and ribosomal transcripts to an .h5ad file.",
    )

    # ---------- Inputs ----------
    ap.add_argument("--h5ad",              default=_D("h5ad", ""))
    ap.add_argument("--assay",             default=_D("assay", "X"),
                    help="'X', 'raw' or a layer name")
    ap.add_argument("--organism",          default=_D("organism", "hg"), choices=list(SUPPORTED_ORGANISMS))
    ap.add_argument("--gene_nomenclature", default=_D("gene_nomenclature", "name"),
                    choices=list(SUPPORTED_NOMENCLATURES))
    ap.add_argument("--reference_dir",     default=_D("reference_dir", ""),
                    help="folder with genes_<mt|ribo>_<organism>_<nomenclature>.tsv.gz; blank = bundled")
    ap.add_argument("--min_version",       default=_D("min_version", "3"))

    # ---------- Outputs ----------
    ap.add_argument("--out_h5ad",          default=_D("out_h5ad", ""))

    # ---------- Toggles ----------
    ap.add_argument("--add_counts", action="store_true", help="Also add nUMI/nGene per cell")
    ap.add_argument("--summary",    action="store_true", help="Print dashboard summary as JSON")
    ap.add_argument("--verbose",    action="store_true", help="Debug logging")

    return ap.parse_args(argv)


def _run(argv=None) -> None:
    a = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if a.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    # --- resolve paths ---
    paths = resolve_paths(a)
    h5ad_abs = paths["h5ad"]
    if not h5ad_abs:
        raise SystemExit("Input file required (--h5ad).")
    out_abs = paths["out_h5ad"] or default_output_path(h5ad_abs)
    ref_abs = paths["reference_dir"]

    from .drivers import run_percent_mt_ribo, run_summary

    print(f"[CLI] Input:  {h5ad_abs}")
    try:
        adata = run_percent_mt_ribo(
            h5ad_abs=h5ad_abs,
            out_h5ad=out_abs,
            assay=a.assay,
            organism=a.organism,
            gene_nomenclature=a.gene_nomenclature,
            reference_dir=ref_abs,
            min_version=a.min_version,
            add_counts=a.add_counts,
        )
    except (ValidationError, FileNotFoundError) as e:
        raise SystemExit(f"[CLI] {e}")
    print(f"[CLI] Output: {out_abs}")

    if a.summary:
        print(json.dumps(run_summary(adata=adata, label=out_abs), indent=2))


def main(argv=None) -> None:
    try:
        _run(argv)
    except KeyboardInterrupt:
        print("[CLI] Interrupted.", file=sys.stderr)
        raise SystemExit(130)


if __name__ == "__main__":
    main()
