"""Closed-form receptive field summaries for a resolved layer chain.

Based on "Computing Receptive Fields of Convolutional Neural Networks"
by Araujo, Norris, and Sim (2019): https://distill.pub/2019/computing-receptive-fields/
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from convscope.geometry.helpers import (
    compute_effective_kernel_size,
    compute_stride_product,
    leading_padding,
)
from convscope.geometry.types import Axis, Coordinate, LayerConfig, Size


@dataclass(frozen=True)
class ReceptiveFieldInfo:
    """Receptive field of one layer's nodes, measured in the input layer.

    Attributes:
        size: Span of the receptive field in input nodes
        stride: Effective stride from input to this layer
        padding: Effective leading padding from input
    """

    size: Size
    stride: Size
    padding: Size

    def input_region(self, coordinate: Coordinate) -> tuple[Coordinate, Coordinate]:
        """Input region [start, end) covered by a node of this layer.

        Implements:
        start = position * stride - padding
        end = start + size
        """
        start = Coordinate(
            coordinate.x * self.stride.x - self.padding.x,
            coordinate.y * self.stride.y - self.padding.y,
        )
        end = Coordinate(start.x + self.size.x, start.y + self.size.y)
        return start, end

    def __str__(self) -> str:
        return (
            f"Receptive Field: {self.size.x}x{self.size.y} nodes, "
            f"stride=({self.stride.x}, {self.stride.y}), "
            f"padding=({self.padding.x}, {self.padding.y})"
        )


def _compute_axis(
    layers: Sequence[LayerConfig], axis: Axis, temporal_mode: bool
) -> tuple[int, int, int]:
    rf_size = 1
    total_pad = 0
    strides: list[int] = []
    for layer in layers:
        conv = layer.convolution
        if conv is None:
            continue
        stride_prod = compute_stride_product(strides)
        k_eff = compute_effective_kernel_size(
            getattr(conv.kernel_size, axis), getattr(conv.dilation, axis)
        )
        rf_size += (k_eff - 1) * stride_prod
        total_pad += leading_padding(conv, axis, temporal_mode) * stride_prod
        strides.append(getattr(conv.stride, axis))
    return rf_size, compute_stride_product(strides), total_pad


def compute_receptive_field_extent(
    layers: Sequence[LayerConfig],
    layer_index: int,
    temporal_mode: bool = False,
) -> ReceptiveFieldInfo:
    """Compute the receptive field of a layer's nodes in the input (pure function).

    Implements, per axis, over layers 1..layer_index:
    r_0 = sum_{l} ((k_l - 1) * prod_{i<l} s_i) + 1
    s_0 = prod_{l} s_l
    p_0 = sum_{l} p_l * prod_{i<l} s_i

    where k_l is the dilated kernel span and p_l the leading padding (zero on
    the Y axis in temporal mode).

    Args:
        layers: Resolved layer chain, input layer first
        layer_index: Layer whose nodes are measured
        temporal_mode: Whether the Y axis is causal

    Returns:
        ReceptiveFieldInfo with per-axis size, stride and padding
    """
    # Layer 0 contributes nothing; index 0 yields a 1x1 field.
    chain = layers[1 : layer_index + 1]
    size_x, stride_x, pad_x = _compute_axis(chain, "x", temporal_mode)
    size_y, stride_y, pad_y = _compute_axis(chain, "y", temporal_mode)
    return ReceptiveFieldInfo(
        size=Size(size_x, size_y),
        stride=Size(stride_x, stride_y),
        padding=Size(pad_x, pad_y),
    )


def _axis_pair(size: Size) -> str:
    return f"{size.x}x{size.y}"


def format_layer_report(
    layers: Sequence[LayerConfig],
    temporal_mode: bool = False,
) -> str:
    """Format a layer-by-layer geometry table (pure function).

    Args:
        layers: Resolved layer chain
        temporal_mode: Whether the Y axis is causal

    Returns:
        Multi-line report
    """
    rule = "-" * 86
    mode = "temporal" if temporal_mode else "symmetric"
    lines = [
        "=" * 86,
        f"LAYER GEOMETRY ({mode} padding)",
        "=" * 86,
        f"{'#':<3} {'Layer':<22} {'k':<7} {'s':<7} {'d':<7} {'p':<7} {'Size':<10} {'RF Size':<10}",
        rule,
    ]
    for index, layer in enumerate(layers):
        conv = layer.convolution
        if conv is None:
            params = ["-"] * 4
        else:
            params = [
                _axis_pair(conv.kernel_size),
                _axis_pair(conv.stride),
                _axis_pair(conv.dilation),
                _axis_pair(conv.padding),
            ]
        rf = compute_receptive_field_extent(layers, index, temporal_mode)
        size_str = _axis_pair(layer.size)
        if layer.size.is_degenerate:
            size_str += " !"
        lines.append(
            f"{index:<3} {layer.name[:22]:<22} "
            + " ".join(f"{p:<7}" for p in params)
            + f" {size_str:<10} {_axis_pair(rf.size):<10}"
        )
    lines.append("=" * 86)
    return "\n".join(lines)


def print_layer_report(
    layers: Sequence[LayerConfig],
    temporal_mode: bool = False,
) -> None:
    """Print the layer geometry table (impure function - I/O)."""
    print("\n" + format_layer_report(layers, temporal_mode) + "\n")
