#!/usr/bin/env python3
"""
Dashboard — Plot preferences
SliderSetting, Preferences, build_preferences
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from ..config import DEFAULT_CEREBRO_OPTIONS


@dataclass(frozen=True)
class SliderSetting:
    """Bounds and default of one slider control."""
    min: float
    max: float
    step: float
    default: float


# (preference name, option key, min, max, step)
_SLIDERS = [
    ("overview_plot_point_size", "overview_default_point_size", 1, 20, 1),
    ("gene_expression_plot_point_size", "gene_expression_default_point_size", 1, 20, 1),
    ("overview_plot_point_opacity", "overview_default_point_opacity", 0.1, 1.0, 0.1),
    ("gene_expression_plot_point_opacity", "gene_expression_default_point_opacity", 0.1, 1.0, 0.1),
    ("overview_plot_percentage_cells_to_show", "overview_default_percentage_cells_to_show", 10, 100, 10),
    ("gene_expression_plot_percentage_cells_to_show",
     "gene_expression_default_percentage_cells_to_show", 10, 100, 10),
]


@dataclass
class Preferences:
    sliders: Dict[str, SliderSetting] = field(default_factory=dict)
    use_webgl: bool = True
    show_hover_info_in_projections: bool = True

    def __getitem__(self, key: str) -> Any:
        if key in self.sliders:
            return self.sliders[key]
        if key in ("use_webgl", "show_hover_info_in_projections"):
            return getattr(self, key)
        raise KeyError(key)


def _option(options: Mapping[str, Any], key: str) -> Any:
    v = options.get(key)
    return DEFAULT_CEREBRO_OPTIONS[key] if v is None else v


def build_preferences(options: Optional[Mapping[str, Any]] = None) -> Preferences:
    """
    Slider bounds are fixed; defaults come from `options` when set there, otherwise
    from DEFAULT_CEREBRO_OPTIONS.
    """
    options = options or {}
    sliders = {
        name: SliderSetting(min=lo, max=hi, step=step, default=_option(options, key))
        for name, key, lo, hi, step in _SLIDERS
    }
    return Preferences(
        sliders=sliders,
        use_webgl=True,
        show_hover_info_in_projections=bool(_option(options, "projections_show_hover_info")),
    )
