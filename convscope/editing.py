"""Pure edit operations on a layer template chain.

Every operation takes a chain snapshot and returns a new tuple; the input is
never mutated. Callers re-resolve the whole chain after each edit.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from convscope.geometry.types import (
    Axis,
    ConvolutionParams,
    Coordinate,
    InvalidConfigurationError,
    LayerConfig,
    LayerTemplate,
    ParamName,
    Selection,
    Size,
)


# Palette color -> hue in degrees
COLOR_HUES: dict[str, int] = {
    "#4CAF50": 120,  # Green (input)
    "#2196F3": 210,  # Blue
    "#9C27B0": 290,  # Purple
    "#FF5722": 14,  # Deep orange
    "#FF9800": 36,  # Orange
    "#795548": 16,  # Brown
    "#607D8B": 18,  # Blue grey
    "#E91E63": 24,  # Pink
    "#3F51B5": 30,  # Indigo
    "#009688": 42,  # Teal
    "#8BC34A": 48,  # Light green
    "#FFEB3B": 54,  # Yellow
}
DEFAULT_HUE = 200

# UI slider ranges (inclusive); the resolvers only enforce the lower bounds.
PARAM_BOUNDS: dict[str, tuple[int, int]] = {
    "kernel_size": (1, 10),
    "stride": (1, 5),
    "dilation": (1, 5),
    "padding": (0, 5),
}


def layer_color(index: int) -> str:
    """Palette color for the layer at a chain index (cycles)."""
    palette = list(COLOR_HUES)
    return palette[index % len(palette)]


def layer_hue(color: str) -> int:
    return COLOR_HUES.get(color, DEFAULT_HUE)


def default_template_chain() -> tuple[LayerTemplate, ...]:
    """Input layer followed by two plain 3x3 convolutions."""
    return (
        LayerTemplate(name="Input Layer", color=layer_color(0)),
        LayerTemplate(
            name="Conv Layer 1",
            color=layer_color(1),
            convolution=ConvolutionParams(),
        ),
        LayerTemplate(
            name="Conv Layer 2",
            color=layer_color(2),
            convolution=ConvolutionParams(),
        ),
    )


def append_layer(
    templates: Sequence[LayerTemplate],
    convolution: ConvolutionParams | None = None,
    name: str | None = None,
) -> tuple[LayerTemplate, ...]:
    """Append a convolution layer at the end of the chain.

    Args:
        templates: Current chain
        convolution: Parameters for the new layer (default 3x3, stride 1)
        name: Display name (default "Conv Layer N")

    Returns:
        New chain with one more layer
    """
    index = len(templates)
    template = LayerTemplate(
        name=name if name is not None else f"Conv Layer {index}",
        color=layer_color(index),
        convolution=convolution if convolution is not None else ConvolutionParams(),
    )
    return (*templates, template)


def _check_index(templates: Sequence[LayerTemplate], index: int) -> None:
    if not 0 <= index < len(templates):
        raise IndexError(f"Layer index {index} out of range for {len(templates)} layers")


def remove_layer(templates: Sequence[LayerTemplate], index: int) -> tuple[LayerTemplate, ...]:
    """Remove a non-input layer.

    Raises:
        InvalidConfigurationError: If asked to remove the input layer
        IndexError: If the index does not exist
    """
    _check_index(templates, index)
    if index == 0:
        raise InvalidConfigurationError("The input layer cannot be removed")
    return tuple(t for i, t in enumerate(templates) if i != index)


def rename_layer(
    templates: Sequence[LayerTemplate], index: int, name: str
) -> tuple[LayerTemplate, ...]:
    _check_index(templates, index)
    updated = list(templates)
    updated[index] = replace(templates[index], name=name)
    return tuple(updated)


def set_convolution_param(
    templates: Sequence[LayerTemplate],
    index: int,
    param: ParamName,
    axis: Axis,
    value: int,
) -> tuple[LayerTemplate, ...]:
    """Change one axis of one convolution parameter of one layer.

    Layers without convolution parameters are left untouched.

    Raises:
        InvalidConfigurationError: If the resulting parameters are invalid
        IndexError: If the index does not exist
    """
    _check_index(templates, index)
    template = templates[index]
    if template.convolution is None:
        return tuple(templates)

    updated = list(templates)
    updated[index] = replace(
        template, convolution=template.convolution.replace_axis(param, axis, value)
    )
    return tuple(updated)


def clamp_selection(
    selection: Selection | None,
    layers: Sequence[LayerConfig],
) -> Selection | None:
    """Bring a possibly stale selection back into the current chain.

    Returns None when the selected layer no longer exists or has no nodes;
    otherwise each axis is clamped into [0, size).
    """
    if selection is None or not 0 <= selection.layer_index < len(layers):
        return None

    size: Size = layers[selection.layer_index].size
    if size.is_degenerate:
        return None

    coordinate = Coordinate(
        min(max(selection.coordinate.x, 0), size.x - 1),
        min(max(selection.coordinate.y, 0), size.y - 1),
    )
    if coordinate == selection.coordinate:
        return selection
    return Selection(selection.layer_index, coordinate)
