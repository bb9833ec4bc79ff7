#!/usr/bin/env python3
"""
Dashboard — Session state
DashboardSession: data set selection/loading and the values derived from it
(trajectories, genes, hover text, tab visibility).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import anndata as ad
import pandas as pd

from ..adata_utils import matrix_format, read_h5ad
from ..config import DEFAULT_CEREBRO_OPTIONS
from ..errors import NoDataSetError
from .hover import build_hover_info
from .preferences import Preferences, build_preferences

logger = logging.getLogger(__name__)

TRAJECTORIES_KEY = "trajectories"
EXTRA_MATERIAL_KEY = "extra_material"
GROUPS_KEY = "groups"


def _existing_file(p: Optional[str]) -> Optional[str]:
    if p and Path(str(p)).expanduser().is_file():
        return str(Path(str(p)).expanduser())
    return None


@dataclass
class DashboardSession:
    """
    State of one dashboard session.

    Derived values are recomputed from the current data set on access and
    raise NoDataSetError until one is loaded.
    """
    options: Dict[str, Any] = field(default_factory=dict)
    token: str = ""

    # Internal state
    path_to_load: Optional[str] = field(default=None, init=False)
    active_tab: Optional[str] = field(default=None, init=False)
    closed: bool = field(default=False, init=False)
    _data: Optional[ad.AnnData] = field(default=None, init=False, repr=False)
    _preferences: Optional[Preferences] = field(default=None, init=False, repr=False)

    def __post_init__(self):
        merged = dict(DEFAULT_CEREBRO_OPTIONS)
        merged.update({k: v for k, v in (self.options or {}).items() if k in DEFAULT_CEREBRO_OPTIONS})
        self.options = merged
        self._preferences = build_preferences(self.options)

    @property
    def preferences(self) -> Preferences:
        return self._preferences

    # ---------------- Data set selection & loading ----------------
    def select_input(self, uploaded_path: Optional[str] = None) -> str:
        """
        Decide which file to load: an uploaded file if it exists, otherwise the
        configured `crb_file_to_load` if it exists, otherwise the example file.
        Selecting a new path drops the currently loaded data set.
        """
        path = (
            _existing_file(uploaded_path)
            or _existing_file(self.options.get("crb_file_to_load"))
            or self.options.get("example_file")
        )
        if not path:
            raise FileNotFoundError(
                "No data set to load: no uploaded file, no `crb_file_to_load` and no `example_file`."
            )
        if path != self.path_to_load:
            self._data = None
        self.path_to_load = str(path)
        return self.path_to_load

    def set_data_set(self, adata: ad.AnnData, label: str = "<in-memory>") -> None:
        """Use an already loaded object instead of reading from disk."""
        logger.info(f"Load data set from variable: {label}")
        self.path_to_load = label
        self._data = adata
        self._log_expression_format()

    def _log_expression_format(self) -> None:
        if self._data is not None and self._data.X is not None:
            logger.info(f"Format of expression data: {matrix_format(self._data.X)}")

    @property
    def data_set(self) -> ad.AnnData:
        if self._data is None:
            if self.path_to_load is None:
                self.select_input()
            logger.info(f"Load data set from file: {self.path_to_load}")
            self._data = read_h5ad(self.path_to_load)
            logger.info(str(self._data))
            self._log_expression_format()
        return self._data

    def _require_data(self) -> ad.AnnData:
        try:
            return self.data_set
        except FileNotFoundError as e:
            raise NoDataSetError(str(e)) from e

    # ---------------- Derived values ----------------
    def trajectory_methods(self) -> List[str]:
        traj = self._require_data().uns.get(TRAJECTORIES_KEY) or {}
        return [str(m) for m in traj.keys()]

    def trajectory_names(self, method: str) -> List[str]:
        traj = self._require_data().uns.get(TRAJECTORIES_KEY) or {}
        per_method = traj.get(method) or {}
        return [str(n) for n in per_method.keys()]

    @property
    def available_trajectories(self) -> List[str]:
        """'<method> // <trajectory>' for every trajectory of every method."""
        return [
            f"{method} // {name}"
            for method in self.trajectory_methods()
            for name in self.trajectory_names(method)
        ]

    @property
    def list_of_genes(self) -> List[str]:
        return [str(g) for g in self._require_data().var_names]

    def extra_material_categories(self) -> List[str]:
        extra = self._require_data().uns.get(EXTRA_MATERIAL_KEY) or {}
        return [str(c) for c in extra.keys()]

    def group_names(self) -> List[str]:
        groups = self._require_data().uns.get(GROUPS_KEY)
        if groups is None:
            return []
        if isinstance(groups, Mapping):
            return [str(g) for g in groups.keys()]
        return [str(g) for g in list(groups)]

    @property
    def hover_info_projections(self) -> Union[pd.Series, str]:
        if not self.preferences.show_hover_info_in_projections:
            return "none"
        adata = self._require_data()
        return build_hover_info(adata.obs, self.group_names())

    # ---------------- Tab visibility ----------------
    @property
    def show_trajectory_tab(self) -> bool:
        return len(self.trajectory_methods()) > 0

    @property
    def show_extra_material_tab(self) -> bool:
        return len(self.extra_material_categories()) > 0

    # ---------------- Session events ----------------
    def set_active_tab(self, name: str) -> None:
        self.active_tab = name
        logger.info(f"Active tab: {name}")

    def timeout(self, reason: str) -> str:
        """Close the session; returns the message shown to the user."""
        now = datetime.now()
        logger.warning(f"Session ({self.token}) timed out at: {now}")
        self.closed = True
        self._data = None
        return f"Session timeout due to {reason} inactivity - {now}"

    def summary(self) -> Dict[str, Any]:
        adata = self._require_data()
        return {
            "data_set": self.path_to_load,
            "n_cells": int(adata.n_obs),
            "n_genes": int(adata.n_vars),
            "expression_format": matrix_format(adata.X),
            "available_trajectories": self.available_trajectories,
            "show_trajectory_tab": self.show_trajectory_tab,
            "show_extra_material_tab": self.show_extra_material_tab,
        }
