# src/cerebro/utils.py
from __future__ import annotations
import re
from pathlib import Path
from typing import Tuple

def default_output_path(in_path: str, suffix: str = "_qc") -> str:
    """/data/pbmc.h5ad -> /data/pbmc_qc.h5ad"""
    p = Path(in_path)
    return str(p.with_name(f"{p.stem}{suffix}{p.suffix or '.h5ad'}"))

def version_tuple(v) -> Tuple[int, ...]:
    """
    '3.1.2' -> (3, 1, 2). Non-numeric tails ('0.10.0rc1') keep their leading digits;
    a component without digits counts as 0.
    """
    parts = []
    for piece in str(v).strip().split("."):
        m = re.match(r"\d+", piece)
        parts.append(int(m.group(0)) if m else 0)
    return tuple(parts) if parts else (0,)

def version_at_least(actual, minimum) -> bool:
    """Numeric comparison per dotted component, shorter side padded with zeros."""
    a, b = version_tuple(actual), version_tuple(minimum)
    width = max(len(a), len(b))
    return a + (0,) * (width - len(a)) >= b + (0,) * (width - len(b))

__all__ = ["default_output_path", "version_tuple", "version_at_least"]
