"""Data types for layer geometry and receptive field resolution.

All types are immutable snapshots. Resolver functions take them as inputs and
return fresh outputs, so nothing here observes or mutates shared state.
"""

from __future__ import annotations

import numbers
from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Literal


Axis = Literal["x", "y"]
ParamName = Literal["kernel_size", "stride", "dilation", "padding"]

PARAM_NAMES: tuple[str, ...] = ("kernel_size", "stride", "dilation", "padding")
AXES: tuple[str, ...] = ("x", "y")


class InvalidConfigurationError(ValueError):
    """Raised when convolution parameters or a template chain are malformed."""


@dataclass(frozen=True)
class Size:
    """Spatial extent of a layer.

    Either axis may be zero or negative after resolution; such a layer is
    degenerate and has no displayable nodes.
    """

    x: int
    y: int

    @classmethod
    def from_value(cls, value: int | tuple[int, int] | Size) -> Size:
        """Normalize a scalar (square) or (x, y) pair to a Size.

        Raises:
            InvalidConfigurationError: If a sequence does not have exactly two
                integer entries
        """
        if isinstance(value, Size):
            return value
        if isinstance(value, numbers.Integral):
            return cls(int(value), int(value))
        if isinstance(value, str) or not isinstance(value, Sequence) or len(value) != 2:
            raise InvalidConfigurationError(
                f"Expected an integer or an (x, y) pair, got {value!r}"
            )
        if not all(isinstance(v, numbers.Integral) for v in value):
            raise InvalidConfigurationError(f"Size entries must be integers, got {value!r}")
        return cls(int(value[0]), int(value[1]))

    @property
    def is_degenerate(self) -> bool:
        return self.x <= 0 or self.y <= 0

    def __str__(self) -> str:
        return f"{self.x}x{self.y}"


@dataclass(frozen=True, order=True)
class Coordinate:
    """Integer node position; may lie outside a layer's [0, size) range."""

    x: int
    y: int


@dataclass(frozen=True)
class ConvolutionParams:
    """Per-axis convolution parameters.

    Attributes:
        kernel_size: Span of the sampling window (>= 1 on both axes)
        stride: Step between successive window placements (>= 1)
        dilation: Spacing between sampled positions in one window (>= 1)
        padding: Virtual border size (>= 0)
    """

    kernel_size: Size = Size(3, 3)
    stride: Size = Size(1, 1)
    dilation: Size = Size(1, 1)
    padding: Size = Size(0, 0)

    def __post_init__(self) -> None:
        """Normalize scalar/tuple fields and validate ranges."""
        for name in PARAM_NAMES:
            object.__setattr__(self, name, Size.from_value(getattr(self, name)))

        for name, minimum in (
            ("kernel_size", 1),
            ("stride", 1),
            ("dilation", 1),
            ("padding", 0),
        ):
            value: Size = getattr(self, name)
            if value.x < minimum or value.y < minimum:
                qualifier = "positive" if minimum == 1 else "non-negative"
                raise InvalidConfigurationError(
                    f"{name} must be {qualifier}, got ({value.x}, {value.y})"
                )

    @property
    def effective_kernel_size(self) -> Size:
        """Dilated window span per axis: dilation * (kernel - 1) + 1."""
        return Size(
            self.dilation.x * (self.kernel_size.x - 1) + 1,
            self.dilation.y * (self.kernel_size.y - 1) + 1,
        )

    def replace_axis(self, param: ParamName, axis: Axis, value: int) -> ConvolutionParams:
        """Return a copy with one axis of one parameter changed.

        Raises:
            InvalidConfigurationError: If the name is unknown or the new value
                is out of range
        """
        if param not in PARAM_NAMES:
            raise InvalidConfigurationError(f"Unknown convolution parameter: {param!r}")
        if axis not in AXES:
            raise InvalidConfigurationError(f"Unknown axis: {axis!r}")
        current: Size = getattr(self, param)
        return replace(self, **{param: replace(current, **{axis: value})})


@dataclass(frozen=True)
class LayerTemplate:
    """A layer as edited by the user, before its size is resolved.

    Only the input layer (index 0 of a chain) has no convolution.
    """

    name: str
    color: str
    convolution: ConvolutionParams | None = None


@dataclass(frozen=True)
class LayerConfig:
    """A LayerTemplate together with its resolved size."""

    template: LayerTemplate
    size: Size

    @property
    def name(self) -> str:
        return self.template.name

    @property
    def color(self) -> str:
        return self.template.color

    @property
    def convolution(self) -> ConvolutionParams | None:
        return self.template.convolution

    def contains(self, coordinate: Coordinate) -> bool:
        """Check whether a coordinate lies inside [0, size.x) x [0, size.y)."""
        return 0 <= coordinate.x < self.size.x and 0 <= coordinate.y < self.size.y

    def is_padding_node(self, coordinate: Coordinate) -> bool:
        return not self.contains(coordinate)


@dataclass(frozen=True)
class Selection:
    """A chosen node: layer index in the logical chain plus a coordinate."""

    layer_index: int
    coordinate: Coordinate


def validate_template_chain(templates: tuple[LayerTemplate, ...] | list[LayerTemplate]) -> None:
    """Check the structural rules of a template chain.

    Args:
        templates: Ordered chain, input layer first

    Raises:
        InvalidConfigurationError: If the chain is empty, the input layer has a
            convolution, or any later layer lacks one
    """
    if not templates:
        raise InvalidConfigurationError("Template chain must contain an input layer")
    if templates[0].convolution is not None:
        raise InvalidConfigurationError(
            f"Input layer {templates[0].name!r} must not have convolution parameters"
        )
    for index, template in enumerate(templates[1:], start=1):
        if template.convolution is None:
            raise InvalidConfigurationError(
                f"Layer {index} ({template.name!r}) is missing convolution parameters"
            )
