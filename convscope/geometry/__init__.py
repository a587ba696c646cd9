"""Layer geometry and receptive field resolution.

This module re-exports the resolver functionality from the submodules.
"""

from convscope.geometry.helpers import (
    compute_effective_kernel_size,
    compute_stride_product,
    leading_padding,
    total_padding,
)
from convscope.geometry.multiset import NodeMultiset
from convscope.geometry.receptive_field import (
    input_coordinates,
    kernel_offsets,
    padding_nodes,
    propagate_to_previous_layer,
    resolve_receptive_field,
)
from convscope.geometry.sizes import (
    compute_output_size,
    compute_output_size_1d,
    resolve_layer_sizes,
)
from convscope.geometry.summary import (
    ReceptiveFieldInfo,
    compute_receptive_field_extent,
    format_layer_report,
    print_layer_report,
)
from convscope.geometry.types import (
    ConvolutionParams,
    Coordinate,
    InvalidConfigurationError,
    LayerConfig,
    LayerTemplate,
    Selection,
    Size,
    validate_template_chain,
)

__all__ = [
    "ConvolutionParams",
    "Coordinate",
    "InvalidConfigurationError",
    "LayerConfig",
    "LayerTemplate",
    "NodeMultiset",
    "ReceptiveFieldInfo",
    "Selection",
    "Size",
    "compute_effective_kernel_size",
    "compute_output_size",
    "compute_output_size_1d",
    "compute_receptive_field_extent",
    "compute_stride_product",
    "format_layer_report",
    "input_coordinates",
    "kernel_offsets",
    "leading_padding",
    "padding_nodes",
    "print_layer_report",
    "propagate_to_previous_layer",
    "resolve_layer_sizes",
    "resolve_receptive_field",
    "total_padding",
    "validate_template_chain",
]
