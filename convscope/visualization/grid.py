"""Dense numpy views of a layer's contribution multiset."""

from __future__ import annotations

import numpy as np

from convscope.geometry.multiset import NodeMultiset
from convscope.geometry.types import Coordinate, Size


def required_margin(multiset: NodeMultiset, size: Size) -> int:
    """Smallest margin that fits every coordinate of the multiset around the layer."""
    margin = 0
    for c in multiset:
        margin = max(margin, -c.x, -c.y, c.x - size.x + 1, c.y - size.y + 1)
    return margin


def multiset_to_grid(
    multiset: NodeMultiset,
    size: Size,
    margin: int | None = None,
) -> tuple[np.ndarray, Coordinate]:
    """Rasterize counts into an array covering the layer plus a padding margin.

    Args:
        multiset: Contribution counts for the layer
        size: Layer size (degenerate sizes are treated as 0)
        margin: Cells added on every side (default: just enough for the multiset)

    Returns:
        Tuple of (counts shaped (y, x), origin) where grid[i, j] holds the count
        of Coordinate(j + origin.x, i + origin.y). Coordinates outside the grid
        are dropped.
    """
    if margin is None:
        margin = required_margin(multiset, size)

    width = max(size.x, 0) + 2 * margin
    height = max(size.y, 0) + 2 * margin
    grid = np.zeros((height, width), dtype=np.int64)
    origin = Coordinate(-margin, -margin)

    for c, n in multiset.all():
        col = c.x - origin.x
        row = c.y - origin.y
        if 0 <= row < height and 0 <= col < width:
            grid[row, col] = n

    return grid, origin
