"""Pick the matplotlib backend from the visualizer config."""

from __future__ import annotations

import os

from convscope.config import VisualizerConfig, config_from_env


def is_headless(config: VisualizerConfig | None = None) -> bool:
    """Check whether figures should be rendered off-screen.

    True when the config asks for headless rendering (CONVSCOPE_HEADLESS when
    the config comes from the environment) or MPLBACKEND is already Agg.
    """
    if config is None:
        config = config_from_env()
    return config.headless or os.environ.get('MPLBACKEND', '').lower() == 'agg'


def configure_matplotlib_backend(config: VisualizerConfig | None = None) -> str:
    """Select the backend before matplotlib.pyplot is imported.

    An explicit MPLBACKEND always wins. Otherwise a headless config selects
    Agg and anything else leaves matplotlib's default in place.

    Args:
        config: Visualizer settings (default: read from CONVSCOPE_* variables)

    Returns:
        Backend name that was configured, or 'default'
    """
    if 'MPLBACKEND' in os.environ:
        return os.environ['MPLBACKEND']

    if is_headless(config):
        os.environ['MPLBACKEND'] = 'Agg'
        return 'Agg'

    return 'default'
