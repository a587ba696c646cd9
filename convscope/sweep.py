"""Automatic selection sweep driving periodic receptive field re-resolution."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator, Sequence

import numpy as np

from convscope.editing import clamp_selection
from convscope.geometry.multiset import NodeMultiset
from convscope.geometry.receptive_field import resolve_receptive_field
from convscope.geometry.types import Coordinate, LayerConfig, Selection, Size


TickCallback = Callable[[Selection | None, list[NodeMultiset]], None]


def next_sweep_coordinate(coordinate: Coordinate, size: Size) -> Coordinate:
    """Advance one step in row-major order, wrapping at both axis bounds."""
    x = coordinate.x + 1
    y = coordinate.y
    if x >= size.x:
        x = 0
        y += 1
        if y >= size.y:
            y = 0
    return Coordinate(x, y)


def sweep_selections(
    layers: Sequence[LayerConfig],
    layer_index: int,
    start: Coordinate | None = None,
) -> Iterator[Selection]:
    """Endless sequence of selections sweeping one layer.

    Args:
        layers: Resolved layer chain
        layer_index: Layer to sweep
        start: First coordinate (default (0, 0))

    Yields:
        Selections in row-major order; nothing if the layer has no nodes
    """
    size = layers[layer_index].size
    if size.is_degenerate:
        return

    coordinate = start if start is not None else Coordinate(0, 0)
    while True:
        yield Selection(layer_index, coordinate)
        coordinate = next_sweep_coordinate(coordinate, size)


class SweepDriver:
    """Steps a selection through one layer and re-resolves on every tick.

    The driver keeps only the current selection; each tick recomputes the
    receptive field from scratch against the layers passed in.
    """

    def __init__(self, layer_index: int, interval_ms: int = 500) -> None:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self.layer_index = layer_index
        self.interval_ms = interval_ms
        self.selection: Selection | None = None

    def reset(self) -> None:
        self.selection = None

    def advance(self, layers: Sequence[LayerConfig]) -> Selection | None:
        """Move to the next coordinate of the target layer.

        A selection made stale by edits is clamped before advancing. Returns
        None when the target layer is missing or degenerate.
        """
        target = Selection(self.layer_index, Coordinate(0, 0))
        if clamp_selection(target, layers) is None:
            self.selection = None
            return None

        current = clamp_selection(self.selection, layers)
        if current is None or current.layer_index != self.layer_index:
            self.selection = target
        else:
            size = layers[self.layer_index].size
            self.selection = Selection(
                self.layer_index, next_sweep_coordinate(current.coordinate, size)
            )
        return self.selection

    def tick(
        self,
        layers: Sequence[LayerConfig],
        temporal_mode: bool = False,
    ) -> tuple[Selection | None, list[NodeMultiset]]:
        """Advance and resolve the receptive field of the new selection."""
        selection = self.advance(layers)
        return selection, resolve_receptive_field(layers, selection, temporal_mode)

    def run(
        self,
        layers: Sequence[LayerConfig],
        num_ticks: int,
        callback: TickCallback,
        temporal_mode: bool = False,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Run a fixed number of ticks, sleeping one interval between them (impure)."""
        for tick_idx in range(num_ticks):
            callback(*self.tick(layers, temporal_mode))
            if tick_idx + 1 < num_ticks:
                sleep(self.interval_ms / 1000.0)


def generate_layer_values(size: Size, seed: int = 0) -> tuple[np.ndarray, np.ndarray]:
    """Cosmetic per-node sample values for display.

    Args:
        size: Layer size
        seed: Seed for the random generator

    Returns:
        Tuple of (values in [0.2, 1.0), activated mask), both shaped (y, x);
        empty arrays for a degenerate layer
    """
    if size.is_degenerate:
        return np.zeros((0, 0)), np.zeros((0, 0), dtype=bool)

    rng = np.random.default_rng(seed)
    values = rng.random((size.y, size.x)) * 0.8 + 0.2
    return values, values > 0.5
