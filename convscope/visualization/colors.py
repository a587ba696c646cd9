"""Node color mapping for rendering (pure functions)."""

from __future__ import annotations

import colorsys

from convscope.editing import layer_hue


RGBA = tuple[float, float, float, float]

SELECTED_COLOR: RGBA = (1.0, 215 / 255, 0.0, 1.0)  # gold
PADDING_COLOR: RGBA = (1.0, 1.0, 1.0, 0.3)


def hsl_to_rgba(hue: float, saturation: float, lightness: float, alpha: float = 1.0) -> RGBA:
    """Convert HSL (degrees, percent, percent) to an RGBA tuple in [0, 1]."""
    r, g, b = colorsys.hls_to_rgb(
        (hue % 360) / 360.0,
        min(max(lightness, 0.0), 100.0) / 100.0,
        min(max(saturation, 0.0), 100.0) / 100.0,
    )
    return (r, g, b, alpha)


def highlight_color(count: int, max_count: int) -> RGBA:
    """Red whose saturation scales with count / max_count."""
    if max_count <= 0:
        return hsl_to_rgba(0, 0, 50)
    return hsl_to_rgba(0, 100.0 * count / max_count, 50)


def base_color(color: str, intensity: float = 0.6) -> RGBA:
    """Un-highlighted node color: the layer's hue, brighter for higher intensity."""
    return hsl_to_rgba(layer_hue(color), 70, 20 + intensity * 50)


def node_color(
    count: int,
    max_count: int,
    color: str,
    intensity: float = 0.6,
    selected: bool = False,
) -> RGBA:
    """Pick a node's color from its selection and highlight state."""
    if selected:
        return SELECTED_COLOR
    if count > 0:
        return highlight_color(count, max_count)
    return base_color(color, intensity)
