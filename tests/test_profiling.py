"""Tests for profiling utilities."""

from __future__ import annotations

import pytest

from convscope.editing import default_template_chain
from convscope.geometry import resolve_layer_sizes
from convscope.profiling import (
    ProfileSummary,
    TickProfile,
    format_profile_summary,
    profile_sweep,
    summarize,
    time_function,
)


class TestTickProfile:
    """Test TickProfile dataclass."""

    def test_immutability(self):
        profile = TickProfile(tick_num=1, resolve_time=0.1, num_nodes=10)
        with pytest.raises(Exception):  # dataclass frozen
            profile.tick_num = 2

    def test_throughput_property(self):
        profile = TickProfile(tick_num=0, resolve_time=0.1, num_nodes=10)
        assert abs(profile.throughput - 10.0) < 0.01

    def test_throughput_zero_time(self):
        profile = TickProfile(tick_num=0, resolve_time=0.0, num_nodes=0)
        assert profile.throughput == 0.0


def test_time_function():
    result, elapsed = time_function(lambda a, b=0: a + b, 2, b=3)
    assert result == 5
    assert elapsed >= 0.0


def test_summarize_empty():
    summary = summarize([])
    assert summary == ProfileSummary("empty", 0, 0.0, 0.0, 0.0, 0.0)


def test_summarize():
    profiles = [TickProfile(i, t, 1) for i, t in enumerate([0.1, 0.3, 0.2])]
    summary = summarize(profiles)
    assert summary.count == 3
    assert summary.min_time == 0.1
    assert summary.max_time == 0.3
    assert abs(summary.mean_time - 0.2) < 1e-9


def test_profile_sweep():
    layers = resolve_layer_sizes(default_template_chain(), 10)
    profiles = profile_sweep(layers, 2, num_ticks=4)
    assert [p.tick_num for p in profiles] == [0, 1, 2, 3]
    # 1 selected + 9 in layer 1 + 25 in the input
    assert all(p.num_nodes == 35 for p in profiles)


def test_format_profile_summary():
    summary = ProfileSummary("resolve", 2, 0.001, 0.0005, 0.002, 0.002)
    text = format_profile_summary(summary, interval_ms=200)
    assert "resolve" in text
    assert "1.00% of a 200 ms interval" in text
