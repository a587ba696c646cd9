"""Visualizer configuration with environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

from convscope.geometry.types import Size


ENV_PREFIX = "CONVSCOPE_"
_TRUTHY = ("true", "1", "yes")


@dataclass(frozen=True)
class VisualizerConfig:
    """
    Global settings shared by the editing and rendering collaborators.

    `reverse_order` only changes how layers are laid out on screen; it never
    changes the logical layer indices the resolvers work with.
    """
    input_size: Size = Size(10, 10)
    temporal_mode: bool = False
    reverse_order: bool = False
    sweep_interval_ms: int = 500
    sweep_layer: int = 1
    headless: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, 'input_size', Size.from_value(self.input_size))
        if self.sweep_interval_ms <= 0:
            raise ValueError(
                f"sweep_interval_ms must be positive, got {self.sweep_interval_ms}"
            )


def _parse_size(value: str) -> Size:
    # Accepts "10", "10x12" or "10,12"
    parts = value.lower().replace(',', 'x').split('x')
    if len(parts) == 1:
        return Size.from_value(int(parts[0]))
    if len(parts) == 2:
        return Size(int(parts[0]), int(parts[1]))
    raise ValueError(f"Cannot parse size from {value!r}")


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in _TRUTHY


def config_from_env(
    base: VisualizerConfig | None = None,
    environ: dict[str, str] | None = None,
) -> VisualizerConfig:
    """
    Build a config from CONVSCOPE_* environment variables.

    Recognized variables: CONVSCOPE_INPUT_SIZE ("10" or "10x12"),
    CONVSCOPE_TEMPORAL, CONVSCOPE_REVERSE_ORDER, CONVSCOPE_HEADLESS
    ("true", "1", "yes" are truthy), CONVSCOPE_SWEEP_INTERVAL_MS and
    CONVSCOPE_SWEEP_LAYER (integers). Unset variables keep the base value.

    Args:
        base: Config to start from (defaults to VisualizerConfig())
        environ: Mapping to read instead of os.environ

    Returns:
        New config with overrides applied
    """
    env = os.environ if environ is None else environ
    config = base if base is not None else VisualizerConfig()

    parsers = {
        'input_size': ('INPUT_SIZE', _parse_size),
        'temporal_mode': ('TEMPORAL', _parse_bool),
        'reverse_order': ('REVERSE_ORDER', _parse_bool),
        'headless': ('HEADLESS', _parse_bool),
        'sweep_interval_ms': ('SWEEP_INTERVAL_MS', int),
        'sweep_layer': ('SWEEP_LAYER', int),
    }
    overrides = {}
    for field_name, (suffix, parse) in parsers.items():
        raw = env.get(ENV_PREFIX + suffix)
        if raw is not None and raw != '':
            overrides[field_name] = parse(raw)

    return replace(config, **overrides)


def display_order(num_layers: int, reverse_order: bool = False) -> list[int]:
    """Logical layer indices in on-screen order."""
    order = list(range(num_layers))
    return order[::-1] if reverse_order else order
