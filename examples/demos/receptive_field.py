"""Demonstration of layer geometry and receptive field propagation.

Prints the resolved layer table for a small convolution chain, the
contribution counts of a selected node in every layer below it, and
optionally saves a figure of the highlighted chain.

Usage:
    python examples/demos/receptive_field.py --layer 2 --x 0 --y 0
    python examples/demos/receptive_field.py --temporal --save rf.png
"""

from __future__ import annotations

import argparse

from convscope.config import config_from_env
from convscope.editing import append_layer, default_template_chain, set_convolution_param
from convscope.geometry import (
    ConvolutionParams,
    Coordinate,
    Selection,
    compute_receptive_field_extent,
    padding_nodes,
    print_layer_report,
    resolve_layer_sizes,
    resolve_receptive_field,
)
from convscope.profiling import format_profile_summary, profile_sweep, summarize
from convscope.sweep import generate_layer_values


def print_multisets(layers, multisets) -> None:
    """Print each layer's contribution counts as a small text grid."""
    for index in range(len(layers) - 1, -1, -1):
        layer, multiset = layers[index], multisets[index]
        if not len(multiset):
            continue
        pads = padding_nodes(layer, multiset)
        print(
            f"\n[{index}] {layer.name} ({layer.size}) - {len(multiset)} nodes, "
            f"max count {multiset.max_count()}, {len(pads)} padding nodes"
        )
        xs = [c.x for c in multiset]
        ys = [c.y for c in multiset]
        for y in range(max(ys), min(ys) - 1, -1):
            row = []
            for x in range(min(xs), max(xs) + 1):
                n = multiset.count(Coordinate(x, y))
                row.append(f"{n:>3}" if n else "  .")
            print("   " + "".join(row))


def main() -> None:
    parser = argparse.ArgumentParser(description="Receptive field explorer demo")
    parser.add_argument("--layer", type=int, default=None, help="Selected layer index")
    parser.add_argument("--x", type=int, default=0)
    parser.add_argument("--y", type=int, default=0)
    parser.add_argument("--input-size", type=int, default=None)
    parser.add_argument("--temporal", action="store_true", help="One-sided Y padding")
    parser.add_argument("--dilated", action="store_true", help="Add a dilated, padded layer")
    parser.add_argument("--save", type=str, default=None, help="Save a figure to this path")
    parser.add_argument("--seed", type=int, default=0, help="Seed for cosmetic node values")
    parser.add_argument("--profile", type=int, default=0, help="Profile N sweep ticks")
    args = parser.parse_args()

    config = config_from_env()
    input_size = config.input_size if args.input_size is None else args.input_size
    temporal = args.temporal or config.temporal_mode

    templates = default_template_chain()
    if args.dilated:
        templates = append_layer(
            templates,
            ConvolutionParams(kernel_size=3, dilation=2, padding=1),
            name="Dilated Conv",
        )
        templates = set_convolution_param(templates, 1, "padding", "y", 1)

    layers = resolve_layer_sizes(templates, input_size, temporal)
    print_layer_report(layers, temporal)

    layer_index = len(layers) - 1 if args.layer is None else args.layer
    selection = Selection(layer_index, Coordinate(args.x, args.y))
    multisets = resolve_receptive_field(layers, selection, temporal)

    rf = compute_receptive_field_extent(layers, layer_index, temporal)
    start, end = rf.input_region(selection.coordinate)
    print(f"\nSelected ({args.x}, {args.y}) in {layers[layer_index].name}")
    print(f"{rf}")
    print(f"Input region: x [{start.x}, {end.x}), y [{start.y}, {end.y})")
    print_multisets(layers, multisets)

    if args.profile > 0:
        profiles = profile_sweep(layers, layer_index, args.profile, temporal)
        print(format_profile_summary(summarize(profiles), config.sweep_interval_ms))

    if args.save:
        from convscope.visualization.backend import configure_matplotlib_backend
        configure_matplotlib_backend(config)
        from convscope.visualization.plotting import plot_layer_chain, save_figure

        values = [generate_layer_values(layer.size, seed=args.seed + i)[0]
                  for i, layer in enumerate(layers)]
        fig = plot_layer_chain(
            layers, multisets, selection, values=values,
            reverse_order=config.reverse_order,
            suptitle=f"Receptive field of ({args.x}, {args.y})",
        )
        save_figure(fig, args.save)
        print(f"\nSaved figure to {args.save}")


if __name__ == "__main__":
    main()
