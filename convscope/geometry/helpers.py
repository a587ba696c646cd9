"""Per-axis arithmetic shared by the size and receptive field resolvers."""

from __future__ import annotations

from functools import reduce

from convscope.geometry.types import Axis, ConvolutionParams


def compute_effective_kernel_size(kernel_size: int, dilation: int) -> int:
    """Compute effective kernel size with dilation (pure function).

    For dilated (atrous) convolutions, the effective kernel size is:
    effective_kernel_size = dilation * (kernel_size - 1) + 1

    Args:
        kernel_size: Original kernel size
        dilation: Dilation factor

    Returns:
        Effective kernel size accounting for dilation
    """
    return dilation * (kernel_size - 1) + 1


def compute_stride_product(strides: list[int]) -> int:
    """Compute product of strides up to layer l-1 (pure function).

    This implements: prod_{i=1}^{l-1} s_i
    """
    return reduce(lambda x, y: x * y, strides, 1)


def total_padding(conv: ConvolutionParams, axis: Axis, temporal_mode: bool) -> int:
    """Padding added to an axis when computing its output size.

    Padding is applied on both sides, except on the Y (time) axis in temporal
    mode where only the leading side is padded.
    """
    padding = getattr(conv.padding, axis)
    if temporal_mode and axis == "y":
        return padding
    return 2 * padding


def leading_padding(conv: ConvolutionParams, axis: Axis, temporal_mode: bool) -> int:
    """Offset subtracted when mapping an output position back to its input.

    In temporal mode the Y axis is aligned on its trailing edge, so no offset
    is applied there.
    """
    if temporal_mode and axis == "y":
        return 0
    return getattr(conv.padding, axis)
