"""Tests for the chart registry and built-in chart types."""

from __future__ import annotations

import pytest

from chartkit.charting.dataset import Dataset
from chartkit.charting.registry import ChartRegistry, chart_registry
from chartkit.charting.types import ChartRequest, ChartResult, printf_formatter


def test_builtin_types_listed(registry):
    types = registry.list_types()
    assert {"bar.basic", "line.basic", "pie.basic"} <= set(types)


def test_register_duplicate_chart_type(registry):
    def _dummy(req, backend):  # pragma: no cover - simple stub
        return ChartResult(widget=None, meta={})

    registry.register("custom.unique", _dummy, "Unique")
    with pytest.raises(ValueError):
        registry.register("custom.unique", _dummy, "Duplicate")


def test_unknown_chart_type(registry):
    with pytest.raises(KeyError):
        registry.build(ChartRequest(chart_type="unknown.type", dataset=Dataset()))


def test_builders_require_dataset(registry):
    with pytest.raises(TypeError):
        registry.build(ChartRequest(chart_type="bar.basic", dataset=[1, 2, 3]))


def test_bar_chart_build(registry):
    ds = Dataset.from_triples([("M", 6, 8), ("T", 2, 4), ("W", 5, 0)])
    result = registry.build(ChartRequest("bar.basic", ds, {"title": "Week"}))
    assert result.meta["points"] == 3
    assert result.meta["series"].normalized_values == [0.75, 0.25, 0.625]
    assert result.meta["bar_max"] == 6.0
    assert "build_ms" in result.meta
    fig = result.widget.figure
    assert len(fig._chartkit_bars) == 3
    assert fig.axes[0].get_title() == "Week"
    heights = [b.get_height() for b in fig._chartkit_bars]
    assert heights == [0.75, 0.25, 0.625]


def test_bar_chart_negative_domain_axis(registry):
    result = registry.build(ChartRequest("bar.basic", Dataset.from_values([-2, 4])))
    assert result.widget.figure.axes[0].get_ylim() == (-1.0, 1.0)


def test_line_chart_build_with_target_line(registry):
    ds = Dataset.from_triples([("a", 1, 2), ("b", 3, 2), ("c", 2, 2)])
    result = registry.build(ChartRequest("line.basic", ds))
    lines = result.widget.figure.axes[0].get_lines()
    assert [ln.get_gid() for ln in lines] == ["values", "targets"]


def test_line_chart_without_targets_draws_one_line(registry):
    result = registry.build(ChartRequest("line.basic", Dataset.from_values([1, 5, 2])))
    assert len(result.widget.figure.axes[0].get_lines()) == 1


def test_pie_chart_build(registry):
    result = registry.build(ChartRequest("pie.basic", Dataset.from_values([10, 10, 10, 10])))
    assert [s.span for s in result.meta["slices"]] == [90.0] * 4
    wedges = result.widget.figure._chartkit_wedges
    assert len(wedges) == 4
    # first slice spans 12 o'clock to 3 o'clock
    assert (wedges[0].theta1, wedges[0].theta2) == (0.0, 90.0)


def test_empty_datasets_build(registry):
    for chart_type in ("bar.basic", "line.basic", "pie.basic"):
        result = registry.build(ChartRequest(chart_type, Dataset()))
        assert result.meta["points"] == 0


def test_export_png_and_svg(registry, tmp_path):
    result = registry.build(ChartRequest("bar.basic", Dataset.from_values([1, 2])))
    png = tmp_path / "chart.png"
    svg = tmp_path / "chart.svg"
    registry.export(result, str(png), format="png", dpi=60)
    registry.export(result, str(svg), format="svg")
    assert png.stat().st_size > 0 and svg.stat().st_size > 0
    with pytest.raises(ValueError):
        registry.export(result, str(tmp_path / "chart.gif"), format="gif")
    with pytest.raises(ValueError):
        registry.backend.export_widget(object(), str(png))


def test_shared_registry_is_preloaded():
    assert isinstance(chart_registry, ChartRegistry)
    assert "pie.basic" in chart_registry.list_types()


def test_printf_formatter():
    assert printf_formatter(2.0, "%.01f") == "2.0"
    assert printf_formatter(1234.5, "%d") == "1234"
