"""Tests for view geometry helpers."""

from __future__ import annotations

import pytest

from chartkit.charting.layout import bar_row_height, bar_spacing, indicator_x, line_points


def test_line_points_spread_and_flip():
    pts = line_points([0.0, 0.5, 1.0], 1.0, 100.0, 50.0)
    assert pts == [(0.0, 50.0), (50.0, 25.0), (100.0, 0.0)]


def test_line_points_with_baseline_below_series():
    # overlay minimum at 0.0 widens the range to 1.0
    pts = line_points([0.5, 1.0], 1.0, 10.0, 10.0, baseline=0.0)
    assert pts == [(0.0, 5.0), (10.0, 0.0)]


def test_line_points_degenerate_inputs():
    assert line_points([], 0.0, 100, 100) == []
    assert line_points([0.3], 0.0, 100, 100) == [(0.0, 100)]
    flat = line_points([0.4, 0.4], 0.0, 100.0, 80.0)
    assert [y for _, y in flat] == [80.0, 80.0]


def test_indicator_x():
    assert indicator_x(-1, 5, 100) is None
    assert indicator_x(0, 0, 100) is None
    assert indicator_x(5, 5, 100) is None
    assert indicator_x(0, 1, 100) == 0.0
    assert indicator_x(2, 5, 100) == pytest.approx(50.0)


def test_bar_spacing_and_height():
    assert bar_spacing(300.0, 5) == pytest.approx(20.0)
    assert bar_spacing(300.0, 0) == 0.0
    assert bar_row_height(200.0, False) == 200.0
    assert bar_row_height(200.0, True) == 100.0
