"""Resolve concrete layer sizes from a template chain."""

from __future__ import annotations

from collections.abc import Sequence

from convscope.geometry.helpers import compute_effective_kernel_size, total_padding
from convscope.geometry.types import (
    Axis,
    ConvolutionParams,
    LayerConfig,
    LayerTemplate,
    Size,
    validate_template_chain,
)


def compute_output_size_1d(
    input_size: int,
    kernel_size: int,
    stride: int,
    dilation: int,
    padding: int,
) -> int:
    """Compute one axis of a convolution's output size (pure function).

    Implements:
    out = floor((in + padding - dilation * (kernel - 1) - 1) / stride + 1)

    `padding` is the total padding for the axis (both sides already summed).
    The result may be zero or negative; it is returned as-is.

    Args:
        input_size: Size of the previous layer along this axis
        kernel_size: Kernel size along this axis
        stride: Stride along this axis (>= 1)
        dilation: Dilation along this axis
        padding: Total padding along this axis

    Returns:
        Output size along this axis
    """
    span = compute_effective_kernel_size(kernel_size, dilation)
    # Floor division keeps negative numerators flooring toward -inf.
    return (input_size + padding - span) // stride + 1


def compute_output_size(
    previous: Size,
    conv: ConvolutionParams,
    temporal_mode: bool = False,
) -> Size:
    """Compute a layer's size from the previous layer's size and its parameters."""

    def axis_size(axis: Axis) -> int:
        return compute_output_size_1d(
            getattr(previous, axis),
            getattr(conv.kernel_size, axis),
            getattr(conv.stride, axis),
            getattr(conv.dilation, axis),
            total_padding(conv, axis, temporal_mode),
        )

    return Size(axis_size("x"), axis_size("y"))


def resolve_layer_sizes(
    templates: Sequence[LayerTemplate],
    input_size: Size | int | tuple[int, int],
    temporal_mode: bool = False,
) -> tuple[LayerConfig, ...]:
    """Resolve every layer's size along the chain (pure function).

    Layer 0 takes the input size verbatim. Each later layer is derived from the
    previous resolved size and its own convolution parameters. The whole chain
    is recomputed on every call.

    Args:
        templates: Ordered chain, input layer first
        input_size: Size of the input layer
        temporal_mode: Pad the Y axis on its leading side only

    Returns:
        Resolved layer configurations, same length and order as `templates`

    Raises:
        InvalidConfigurationError: If the chain is structurally invalid
    """
    validate_template_chain(templates)

    size = Size.from_value(input_size)
    layers = [LayerConfig(template=templates[0], size=size)]
    for template in templates[1:]:
        size = compute_output_size(size, template.convolution, temporal_mode)
        layers.append(LayerConfig(template=template, size=size))

    return tuple(layers)
