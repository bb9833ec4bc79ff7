#!/usr/bin/env python3
"""
Dashboard — Hover text for projections
build_hover_info
"""

from __future__ import annotations

from typing import List, Optional

import pandas as pd


def _fmt_count(v) -> str:
    if pd.isna(v):
        return "NA"
    return f"{int(round(float(v))):,}"


def build_hover_info(obs: pd.DataFrame, groups: Optional[List[str]] = None) -> pd.Series:
    """
    One hover string per cell, indexed by cell barcode.

    Lines: 'Cell: <barcode>', '<group>: <value>' for each grouping column present
    in `obs`, then 'Transcripts' / 'Expressed genes' when nUMI / nGene exist.
    Lines are joined with '<br>'.
    """
    barcodes = obs.index.astype(str)
    lines: List[pd.Series] = [pd.Series("Cell: " + barcodes, index=obs.index)]

    for g in groups or []:
        if g in obs.columns:
            lines.append(f"{g}: " + obs[g].astype(str))

    if "nUMI" in obs.columns:
        lines.append("Transcripts: " + obs["nUMI"].map(_fmt_count))
    if "nGene" in obs.columns:
        lines.append("Expressed genes: " + obs["nGene"].map(_fmt_count))

    hover = lines[0]
    for part in lines[1:]:
        hover = hover + "<br>" + part
    hover.index = barcodes
    return hover
