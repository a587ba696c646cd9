"""Core plotting functions (pure side effects - don't modify inputs)."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import numpy as np

try:
    import matplotlib.pyplot as plt
    import matplotlib.figure
    from matplotlib.patches import Rectangle
    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False

from convscope.config import display_order
from convscope.geometry.multiset import NodeMultiset
from convscope.geometry.types import Coordinate, LayerConfig, Selection
from convscope.visualization.colors import PADDING_COLOR, node_color
from convscope.visualization.grid import multiset_to_grid, required_margin


def _check_matplotlib() -> None:
    """Check if matplotlib is available."""
    if not HAS_MATPLOTLIB:
        raise ImportError(
            "Matplotlib is required for visualization. "
            "Install with: pip install matplotlib"
        )


def layer_image(
    layer: LayerConfig,
    multiset: NodeMultiset,
    selected: Coordinate | None = None,
    values: np.ndarray | None = None,
    margin: int | None = None,
) -> tuple[np.ndarray, Coordinate]:
    """Build an RGBA image (y, x, 4) of one layer and its padding margin.

    Args:
        layer: Resolved layer
        multiset: Contribution counts for the layer
        selected: Selected coordinate in this layer, if any
        values: Optional cosmetic values (y, x) used as base intensity
        margin: Padding cells drawn around the layer (default: fit multiset)

    Returns:
        Tuple of (image, origin) with the same origin convention as
        multiset_to_grid
    """
    if margin is None:
        margin = required_margin(multiset, layer.size)
    counts, origin = multiset_to_grid(multiset, layer.size, margin)
    max_count = multiset.max_count()

    image = np.zeros(counts.shape + (4,), dtype=float)
    for row in range(counts.shape[0]):
        for col in range(counts.shape[1]):
            coordinate = Coordinate(col + origin.x, row + origin.y)
            count = int(counts[row, col])
            if layer.contains(coordinate):
                intensity = 0.6
                if values is not None:
                    intensity = 0.3 + 0.7 * float(values[coordinate.y, coordinate.x])
                image[row, col] = node_color(
                    count, max_count, layer.color, intensity,
                    selected=coordinate == selected,
                )
            elif count > 0:
                image[row, col] = PADDING_COLOR

    return image, origin


def plot_layer_chain(
    layers: Sequence[LayerConfig],
    multisets: Sequence[NodeMultiset] | None = None,
    selection: Selection | None = None,
    values: Sequence[np.ndarray | None] | None = None,
    reverse_order: bool = False,
    figsize: tuple[float, float] | None = None,
    suptitle: str | None = None,
) -> matplotlib.figure.Figure:
    """Plot every displayable layer side by side (pure side effect).

    Degenerate layers are skipped. `reverse_order` changes only the panel order.

    Args:
        layers: Resolved layer chain
        multisets: One multiset per layer (default: nothing highlighted)
        selection: Current selection, drawn in gold
        values: Optional per-layer cosmetic values shaped (y, x), as produced
            by convscope.sweep.generate_layer_values; they set base brightness
        reverse_order: Show the last layer first
        figsize: Figure size (default: auto-scale)
        suptitle: Overall title for the figure

    Returns:
        Matplotlib figure object
    """
    _check_matplotlib()

    if multisets is None:
        multisets = [NodeMultiset() for _ in layers]

    shown = [
        i for i in display_order(len(layers), reverse_order)
        if not layers[i].size.is_degenerate
    ]
    num_panels = max(len(shown), 1)
    if figsize is None:
        figsize = (4 * num_panels, 4.5)

    fig, axes = plt.subplots(1, num_panels, figsize=figsize, squeeze=False)
    axes = axes[0]

    for ax, index in zip(axes, shown):
        layer = layers[index]
        selected = None
        if selection is not None and selection.layer_index == index:
            selected = selection.coordinate

        layer_values = values[index] if values is not None else None
        image, origin = layer_image(layer, multisets[index], selected, layer_values)
        height, width = image.shape[:2]
        ax.imshow(
            image,
            origin='lower',
            interpolation='nearest',
            extent=(origin.x - 0.5, origin.x + width - 0.5,
                    origin.y - 0.5, origin.y + height - 0.5),
        )
        ax.add_patch(Rectangle(
            (-0.5, -0.5), layer.size.x, layer.size.y,
            fill=False, edgecolor='#333333', linewidth=1.5,
        ))
        ax.set_title(f"{layer.name}\n{layer.size.x}×{layer.size.y}")
        ax.set_xticks([])
        ax.set_yticks([])

    for ax in axes[len(shown):]:
        ax.axis('off')

    if suptitle is not None:
        fig.suptitle(suptitle)

    plt.tight_layout()
    return fig


def save_figure(fig: matplotlib.figure.Figure, path: str | Path, dpi: int = 100) -> None:
    """Save a figure and close it (impure function - I/O)."""
    _check_matplotlib()
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches='tight')
    plt.close(fig)
