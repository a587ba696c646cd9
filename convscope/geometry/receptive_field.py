"""Backward propagation of a selected node through the layer chain.

Given a selected coordinate in one layer, walk the chain down to the input and
collect, per layer, every coordinate that contributes to it together with how
many times it does so. Coordinates that fall outside a layer's bounds are kept:
they are the padding nodes of that layer.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from convscope.geometry.helpers import leading_padding
from convscope.geometry.multiset import NodeMultiset
from convscope.geometry.types import ConvolutionParams, Coordinate, LayerConfig, Selection


def kernel_offsets(conv: ConvolutionParams) -> Iterator[tuple[int, int]]:
    """Yield every (kx, ky) kernel offset of a window."""
    for kx in range(conv.kernel_size.x):
        for ky in range(conv.kernel_size.y):
            yield kx, ky


def input_coordinates(
    output: Coordinate,
    conv: ConvolutionParams,
    temporal_mode: bool = False,
) -> list[Coordinate]:
    """Map one output coordinate to the input coordinates its window samples.

    Implements, per kernel offset (kx, ky):
    in_x = out_x * stride_x + kx * dilation_x - padding_x
    in_y = out_y * stride_y + ky * dilation_y - padding_y

    In temporal mode the Y padding offset is dropped.

    Args:
        output: Coordinate in the convolution's output layer
        conv: Parameters of the convolution producing that layer
        temporal_mode: Whether the Y axis is causal

    Returns:
        One coordinate per kernel offset (kernel_size.x * kernel_size.y total)
    """
    pad_x = leading_padding(conv, "x", temporal_mode)
    pad_y = leading_padding(conv, "y", temporal_mode)
    return [
        Coordinate(
            output.x * conv.stride.x + kx * conv.dilation.x - pad_x,
            output.y * conv.stride.y + ky * conv.dilation.y - pad_y,
        )
        for kx, ky in kernel_offsets(conv)
    ]


def propagate_to_previous_layer(
    outputs: NodeMultiset,
    conv: ConvolutionParams,
    temporal_mode: bool = False,
) -> NodeMultiset:
    """Propagate a layer's contribution multiset one step back.

    Each output coordinate with count n contributes n times to every input
    coordinate its window samples.
    """
    inputs = NodeMultiset()
    for output, count in outputs.all():
        for coordinate in input_coordinates(output, conv, temporal_mode):
            inputs.add(coordinate, count)
    return inputs


def resolve_receptive_field(
    layers: Sequence[LayerConfig],
    selection: Selection | None,
    temporal_mode: bool = False,
) -> list[NodeMultiset]:
    """Compute per-layer contribution multisets for a selection (pure function).

    The selected layer holds exactly the selected coordinate with count 1;
    later layers stay empty. The selection is not checked against the layer's
    bounds.

    Args:
        layers: Resolved layer chain, input layer first
        selection: Selected node, or None for no selection
        temporal_mode: Whether the Y axis is causal

    Returns:
        One multiset per layer, indexed like `layers`

    Raises:
        IndexError: If the selection refers to a layer that does not exist.
            After an edit removes layers, pass the selection through
            `convscope.editing.clamp_selection` first; it returns None for a
            vanished layer.
    """
    multisets = [NodeMultiset() for _ in layers]
    if selection is None:
        return multisets

    if not 0 <= selection.layer_index < len(layers):
        raise IndexError(
            f"Selected layer {selection.layer_index} out of range "
            f"for chain of {len(layers)} layers"
        )

    multisets[selection.layer_index].add(selection.coordinate)

    for layer in range(selection.layer_index, 0, -1):
        conv = layers[layer].convolution
        if conv is None:
            # Pass-through layer: nothing reaches the layers below it.
            continue
        multisets[layer - 1] = propagate_to_previous_layer(
            multisets[layer], conv, temporal_mode
        )

    return multisets


def padding_nodes(layer: LayerConfig, multiset: NodeMultiset) -> list[tuple[Coordinate, int]]:
    """Entries of a layer's multiset that lie outside the layer's bounds."""
    return [(c, n) for c, n in multiset.all() if layer.is_padding_node(c)]
