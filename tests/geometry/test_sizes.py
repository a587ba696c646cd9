"""Tests for layer size resolution."""

from __future__ import annotations

import pytest
from hypothesis import given, strategies as st

from convscope.geometry import (
    ConvolutionParams,
    InvalidConfigurationError,
    LayerTemplate,
    Size,
    compute_output_size,
    compute_output_size_1d,
    resolve_layer_sizes,
)


def make_chain(*convs: ConvolutionParams) -> list[LayerTemplate]:
    chain = [LayerTemplate("Input Layer", "#4CAF50")]
    chain.extend(LayerTemplate(f"Conv {i + 1}", "#2196F3", conv) for i, conv in enumerate(convs))
    return chain


def test_compute_output_size_1d():
    # (10 + 0 - 2 - 1) // 1 + 1 = 8
    assert compute_output_size_1d(10, 3, 1, 1, 0) == 8
    # (10 + 2 - 2 - 1) // 2 + 1 = 5
    assert compute_output_size_1d(10, 3, 2, 1, 2) == 5
    # Dilation 2: span 5 -> (10 - 5) // 1 + 1 = 6
    assert compute_output_size_1d(10, 3, 1, 2, 0) == 6


def test_compute_output_size_1d_degenerate():
    """Windows larger than the input give zero or negative sizes, not errors."""
    assert compute_output_size_1d(2, 3, 1, 1, 0) == 0
    assert compute_output_size_1d(2, 5, 1, 1, 0) == -2
    # Floor (not truncation) for negative numerators: (1 - 5) // 2 + 1 = -1
    assert compute_output_size_1d(1, 5, 2, 1, 0) == -1


def test_input_layer_size_is_verbatim():
    layers = resolve_layer_sizes(make_chain(), Size(7, 3))
    assert len(layers) == 1
    assert layers[0].size == Size(7, 3)
    assert layers[0].convolution is None


def test_basic_window():
    """10x10 input, one 3x3 convolution with stride 1 and no padding gives 8x8."""
    layers = resolve_layer_sizes(make_chain(ConvolutionParams()), 10)
    assert [layer.size for layer in layers] == [Size(10, 10), Size(8, 8)]


def test_chain_propagates_sizes():
    layers = resolve_layer_sizes(
        make_chain(
            ConvolutionParams(),
            ConvolutionParams(),
            ConvolutionParams(kernel_size=2, stride=2),
        ),
        Size(10, 10),
    )
    assert [layer.size for layer in layers] == [Size(10, 10), Size(8, 8), Size(6, 6), Size(3, 3)]


def test_asymmetric_parameters():
    conv = ConvolutionParams(kernel_size=(3, 1), stride=(1, 2), dilation=(2, 1), padding=(1, 0))
    layers = resolve_layer_sizes(make_chain(conv), Size(10, 9))
    # x: (10 + 2 - 4 - 1) // 1 + 1 = 8; y: (9 + 0 - 0 - 1) // 2 + 1 = 5
    assert layers[1].size == Size(8, 5)


def test_temporal_mode_pads_y_on_one_side():
    conv = ConvolutionParams(kernel_size=3, stride=1, dilation=1, padding=1)
    temporal = resolve_layer_sizes(make_chain(conv), Size(10, 10), temporal_mode=True)
    symmetric = resolve_layer_sizes(make_chain(conv), Size(10, 10), temporal_mode=False)

    # Y: temporal (10 + 1 - 2 - 1) + 1 = 9, symmetric (10 + 2 - 2 - 1) + 1 = 10
    assert temporal[1].size == Size(10, 9)
    assert symmetric[1].size == Size(10, 10)


def test_temporal_mode_does_not_affect_x():
    conv = ConvolutionParams(kernel_size=3, padding=(2, 0))
    temporal = resolve_layer_sizes(make_chain(conv), Size(10, 10), temporal_mode=True)
    symmetric = resolve_layer_sizes(make_chain(conv), Size(10, 10))
    assert temporal[1].size.x == symmetric[1].size.x == 12


def test_degenerate_layer_is_returned_as_is():
    layers = resolve_layer_sizes(
        make_chain(ConvolutionParams(kernel_size=5), ConvolutionParams(kernel_size=5)),
        Size(6, 6),
    )
    assert layers[1].size == Size(2, 2)
    assert layers[2].size == Size(-2, -2)
    assert layers[2].size.is_degenerate


def test_invalid_chain_fails_fast():
    with pytest.raises(InvalidConfigurationError):
        resolve_layer_sizes([], Size(10, 10))

    with pytest.raises(InvalidConfigurationError):
        resolve_layer_sizes(
            [LayerTemplate("in", "#4CAF50"), LayerTemplate("c", "#2196F3")], Size(10, 10)
        )


def test_templates_are_preserved():
    chain = make_chain(ConvolutionParams())
    layers = resolve_layer_sizes(chain, 10)
    assert layers[1].template is chain[1]
    assert layers[1].name == "Conv 1"
    assert layers[1].color == "#2196F3"


def test_resolution_is_idempotent():
    chain = make_chain(ConvolutionParams(stride=2, padding=1), ConvolutionParams(dilation=2))
    assert resolve_layer_sizes(chain, 16, True) == resolve_layer_sizes(chain, 16, True)


# Property-based tests


@given(
    prev=st.integers(min_value=1, max_value=40),
    kernel=st.integers(min_value=1, max_value=10),
    stride=st.integers(min_value=1, max_value=5),
    dilation=st.integers(min_value=1, max_value=5),
    padding=st.integers(min_value=0, max_value=5),
    temporal=st.booleans(),
)
def test_size_matches_closed_form(
    prev: int, kernel: int, stride: int, dilation: int, padding: int, temporal: bool
):
    """Property: each axis matches floor((in + pad - d*(k-1) - 1) / s + 1)."""
    conv = ConvolutionParams(kernel_size=kernel, stride=stride, dilation=dilation, padding=padding)
    size = compute_output_size(Size(prev, prev), conv, temporal)

    numerator_x = prev + 2 * padding - dilation * (kernel - 1) - 1
    pad_y = padding if temporal else 2 * padding
    numerator_y = prev + pad_y - dilation * (kernel - 1) - 1
    assert size.x == numerator_x // stride + 1
    assert size.y == numerator_y // stride + 1


@given(
    sizes=st.lists(st.integers(min_value=1, max_value=4), min_size=1, max_size=6),
    input_size=st.integers(min_value=1, max_value=30),
)
def test_chain_length_preserved(sizes: list[int], input_size: int):
    """Property: resolution returns one config per template, input first."""
    chain = make_chain(*(ConvolutionParams(kernel_size=k) for k in sizes))
    layers = resolve_layer_sizes(chain, input_size)
    assert len(layers) == len(chain)
    assert layers[0].size == Size(input_size, input_size)
