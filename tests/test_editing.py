"""Tests for template chain edit operations."""

from __future__ import annotations

import pytest

from convscope.editing import (
    PARAM_BOUNDS,
    append_layer,
    clamp_selection,
    default_template_chain,
    layer_color,
    layer_hue,
    remove_layer,
    rename_layer,
    set_convolution_param,
)
from convscope.geometry import (
    ConvolutionParams,
    Coordinate,
    InvalidConfigurationError,
    Selection,
    Size,
    resolve_layer_sizes,
    resolve_receptive_field,
)


def test_default_chain_resolves():
    layers = resolve_layer_sizes(default_template_chain(), 10)
    assert [layer.size for layer in layers] == [Size(10, 10), Size(8, 8), Size(6, 6)]
    assert layers[0].name == "Input Layer"
    assert layers[0].color == "#4CAF50"


def test_layer_color_cycles():
    assert layer_color(0) == "#4CAF50"
    assert layer_color(1) == "#2196F3"
    assert layer_color(12) == layer_color(0)


def test_layer_hue():
    assert layer_hue("#4CAF50") == 120
    assert layer_hue("#9C27B0") == 290
    assert layer_hue("#123456") == 200


def test_append_layer():
    chain = default_template_chain()
    longer = append_layer(chain)
    assert len(longer) == 4
    assert len(chain) == 3
    assert longer[3].name == "Conv Layer 3"
    assert longer[3].color == layer_color(3)
    assert longer[3].convolution == ConvolutionParams()

    custom = append_layer(chain, ConvolutionParams(stride=2), name="Down")
    assert custom[-1].name == "Down"
    assert custom[-1].convolution.stride == Size(2, 2)


def test_remove_layer():
    chain = default_template_chain()
    shorter = remove_layer(chain, 1)
    assert [t.name for t in shorter] == ["Input Layer", "Conv Layer 2"]

    with pytest.raises(InvalidConfigurationError, match="input layer cannot be removed"):
        remove_layer(chain, 0)

    with pytest.raises(IndexError):
        remove_layer(chain, 3)


def test_rename_layer():
    chain = default_template_chain()
    renamed = rename_layer(chain, 0, "Image")
    assert renamed[0].name == "Image"
    assert chain[0].name == "Input Layer"


def test_set_convolution_param():
    chain = default_template_chain()
    updated = set_convolution_param(chain, 1, "kernel_size", "y", 5)
    assert updated[1].convolution.kernel_size == Size(3, 5)
    assert chain[1].convolution.kernel_size == Size(3, 3)

    layers = resolve_layer_sizes(updated, 10)
    assert layers[1].size == Size(8, 6)


def test_set_convolution_param_rejects_invalid_values():
    with pytest.raises(InvalidConfigurationError):
        set_convolution_param(default_template_chain(), 1, "stride", "x", 0)


def test_set_convolution_param_on_input_layer_is_noop():
    chain = default_template_chain()
    assert set_convolution_param(chain, 0, "stride", "x", 2) == chain


def test_param_bounds_respect_validation():
    for param, (low, high) in PARAM_BOUNDS.items():
        conv = ConvolutionParams().replace_axis(param, "x", low).replace_axis(param, "y", high)
        assert getattr(conv, param) == Size(low, high)


def test_clamp_selection():
    layers = resolve_layer_sizes(default_template_chain(), 10)

    assert clamp_selection(None, layers) is None
    assert clamp_selection(Selection(5, Coordinate(0, 0)), layers) is None

    inside = Selection(1, Coordinate(3, 4))
    assert clamp_selection(inside, layers) is inside

    assert clamp_selection(Selection(2, Coordinate(9, -2)), layers) == Selection(2, Coordinate(5, 0))


def test_clamp_selection_on_degenerate_layer():
    chain = set_convolution_param(default_template_chain(), 2, "kernel_size", "x", 10)
    layers = resolve_layer_sizes(chain, 10)
    assert layers[2].size.is_degenerate
    assert clamp_selection(Selection(2, Coordinate(0, 0)), layers) is None


def test_stale_selection_after_edit():
    """Shrinking a layer leaves a stale selection that still resolves; clamping fixes it."""
    chain = default_template_chain()
    selection = Selection(2, Coordinate(5, 5))

    shrunk = resolve_layer_sizes(set_convolution_param(chain, 2, "kernel_size", "x", 5), 10)
    assert shrunk[2].size == Size(4, 6)
    stale = resolve_receptive_field(shrunk, selection)
    assert shrunk[2].is_padding_node(selection.coordinate)
    assert stale[2].count(selection.coordinate) == 1

    clamped = clamp_selection(selection, shrunk)
    assert clamped == Selection(2, Coordinate(3, 5))
