"""Convscope: layer geometry and receptive field explorer for convolutions.

Public API exports for size resolution, receptive field propagation, chain
editing and the automatic selection sweep.
"""

from convscope.config import VisualizerConfig, config_from_env, display_order
from convscope.editing import (
    append_layer,
    clamp_selection,
    default_template_chain,
    remove_layer,
    rename_layer,
    set_convolution_param,
)
from convscope.geometry import (
    ConvolutionParams,
    Coordinate,
    InvalidConfigurationError,
    LayerConfig,
    LayerTemplate,
    NodeMultiset,
    ReceptiveFieldInfo,
    Selection,
    Size,
    compute_receptive_field_extent,
    format_layer_report,
    print_layer_report,
    resolve_layer_sizes,
    resolve_receptive_field,
)
from convscope.sweep import SweepDriver, next_sweep_coordinate, sweep_selections

__version__ = "0.1.0"

__all__ = [
    # Geometry
    "ConvolutionParams",
    "Coordinate",
    "InvalidConfigurationError",
    "LayerConfig",
    "LayerTemplate",
    "NodeMultiset",
    "ReceptiveFieldInfo",
    "Selection",
    "Size",
    "resolve_layer_sizes",
    "resolve_receptive_field",
    "compute_receptive_field_extent",
    "format_layer_report",
    "print_layer_report",

    # Editing
    "default_template_chain",
    "append_layer",
    "remove_layer",
    "rename_layer",
    "set_convolution_param",
    "clamp_selection",

    # Sweep
    "SweepDriver",
    "next_sweep_coordinate",
    "sweep_selections",

    # Config
    "VisualizerConfig",
    "config_from_env",
    "display_order",
]
