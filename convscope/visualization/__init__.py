"""Rendering helpers for resolved layers and their receptive fields."""

from convscope.visualization.backend import configure_matplotlib_backend, is_headless
from convscope.visualization.colors import (
    PADDING_COLOR,
    SELECTED_COLOR,
    base_color,
    highlight_color,
    node_color,
)
from convscope.visualization.grid import multiset_to_grid, required_margin

__all__ = [
    "PADDING_COLOR",
    "SELECTED_COLOR",
    "base_color",
    "configure_matplotlib_backend",
    "highlight_color",
    "is_headless",
    "multiset_to_grid",
    "node_color",
    "required_margin",
]
