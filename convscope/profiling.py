"""Timing utilities for resolver invocations.

Used to check that re-resolving on every sweep tick stays well inside the
tick interval.
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from convscope.geometry.receptive_field import resolve_receptive_field
from convscope.geometry.types import LayerConfig
from convscope.sweep import SweepDriver


T = TypeVar("T")


@dataclass(frozen=True)
class TickProfile:
    """Immutable profiling data for a single sweep tick."""

    tick_num: int
    resolve_time: float
    num_nodes: int

    @property
    def throughput(self) -> float:
        """Resolutions per second."""
        return 1.0 / self.resolve_time if self.resolve_time > 0 else 0.0


@dataclass(frozen=True)
class ProfileSummary:
    """Statistical summary of profiling data."""

    name: str
    count: int
    mean_time: float
    min_time: float
    max_time: float
    total_time: float

    def __str__(self) -> str:
        return (
            f"{self.name}:\n"
            f"  Count:     {self.count}\n"
            f"  Mean:      {self.mean_time*1000:.3f} ms\n"
            f"  Min:       {self.min_time*1000:.3f} ms\n"
            f"  Max:       {self.max_time*1000:.3f} ms\n"
            f"  Total:     {self.total_time:.3f} s"
        )


def time_function(fn: Callable[..., T], *args: Any, **kwargs: Any) -> tuple[T, float]:
    """Call a function and measure its wall-clock duration.

    Returns:
        Tuple of (result, elapsed_time_seconds)
    """
    start = time.perf_counter()
    result = fn(*args, **kwargs)
    return result, time.perf_counter() - start


def summarize(profiles: list[TickProfile], name: str = "resolve") -> ProfileSummary:
    """Create summary statistics from a list of tick profiles."""
    if not profiles:
        return ProfileSummary("empty", 0, 0.0, 0.0, 0.0, 0.0)

    times = [p.resolve_time for p in profiles]
    return ProfileSummary(
        name=name,
        count=len(profiles),
        mean_time=sum(times) / len(times),
        min_time=min(times),
        max_time=max(times),
        total_time=sum(times),
    )


def profile_sweep(
    layers: Sequence[LayerConfig],
    layer_index: int,
    num_ticks: int,
    temporal_mode: bool = False,
) -> list[TickProfile]:
    """Time the receptive field resolution for consecutive sweep selections.

    Runs without sleeping between ticks.

    Args:
        layers: Resolved layer chain
        layer_index: Layer to sweep
        num_ticks: Number of selections to resolve
        temporal_mode: Whether the Y axis is causal

    Returns:
        One profile per tick
    """
    driver = SweepDriver(layer_index)
    profiles = []
    for tick_num in range(num_ticks):
        selection = driver.advance(layers)
        multisets, elapsed = time_function(
            resolve_receptive_field, layers, selection, temporal_mode
        )
        profiles.append(
            TickProfile(
                tick_num=tick_num,
                resolve_time=elapsed,
                num_nodes=sum(len(m) for m in multisets),
            )
        )
    return profiles


def format_profile_summary(summary: ProfileSummary, interval_ms: int) -> str:
    """Format a summary against the sweep interval it has to fit in.

    Args:
        summary: Summary from summarize()
        interval_ms: Sweep tick interval in milliseconds

    Returns:
        Formatted string
    """
    budget = 100.0 * summary.max_time * 1000 / interval_ms if interval_ms > 0 else 0.0
    return (
        f"\n{'='*70}\n"
        f"{summary}\n"
        f"  Worst tick uses {budget:.2f}% of a {interval_ms} ms interval\n"
        f"{'='*70}"
    )
