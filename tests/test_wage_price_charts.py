"""Tests for the three chart renderers and their pointer handlers."""

from __future__ import annotations

import matplotlib.pyplot as plt
import pytest
from matplotlib.backend_bases import LocationEvent, MouseEvent

from wage_price_charts import (
    DualAxisChart,
    PurchasingPowerChart,
    ReproductionChart,
    render_all,
)
from wage_price_hover import Tooltip
from wage_price_scales import nice_max

pytestmark = pytest.mark.unit


def _move(renderer, x: float, y: float | None = None) -> MouseEvent:
    """Send a pointer-move through the figure's callbacks."""

    canvas = renderer.figure.canvas
    if y is None:
        bbox = renderer.ax.bbox
        y = (bbox.y0 + bbox.y1) / 2
    event = MouseEvent("motion_notify_event", canvas, x, y)
    canvas.callbacks.process("motion_notify_event", event)
    return event


def test_render_all_draws_three_fixed_targets(gappy_records) -> None:
    """One 1100x560 figure per chart id."""

    renderers = render_all(gappy_records, Tooltip())

    assert [r.target_id for r in renderers] == ["chart", "chart2", "chart3"]
    assert plt.get_figlabels() == ["chart", "chart2", "chart3"]
    for r in renderers:
        w, h = r.figure.get_size_inches() * r.figure.dpi
        assert (w, h) == pytest.approx((1100, 560))
        assert r.ax.bbox.x0 == pytest.approx(r.layout.left)
        assert r.ax.bbox.width == pytest.approx(r.layout.inner_width)


def test_rerender_clears_previous_layers(gappy_records) -> None:
    """Rendering again redraws the figure from scratch."""

    chart = ReproductionChart(gappy_records, Tooltip())
    chart.render()
    chart.render()

    assert len(chart.figure.axes) == 1
    assert len(chart.bars.patches) == len(gappy_records)


def test_reproduction_bars_and_wage_area_share_one_scale(gappy_records) -> None:
    """Bars follow wheat; the wage line only covers wage-present rows."""

    chart = ReproductionChart(gappy_records, Tooltip())
    chart.render()

    heights = [p.get_height() for p in chart.bars.patches]
    assert heights == [r.wheat for r in gappy_records]
    assert chart.ax.get_ylim() == (0, nice_max(64.0))

    (line,) = chart.wage_lines
    xs = line.get_xdata()
    assert min(xs) == pytest.approx(chart.x.center(1565))
    assert max(xs) == pytest.approx(chart.x.center(1590))


def test_dual_axis_wage_line_breaks_at_missing_wages(gappy_records) -> None:
    """No wage segment joins the year before a gap to the year after it."""

    chart = DualAxisChart(gappy_records, Tooltip())
    chart.render()

    assert len(chart.wage_lines) == 2
    before_gap = chart.x.center(1575)
    after_gap = chart.x.center(1585)
    for line in chart.wage_lines:
        xs = line.get_xdata()
        assert not (min(xs) <= before_gap and max(xs) >= after_gap)
        assert line.axes is chart.ax_right

    assert len(chart.markers.get_offsets()) == 5


def test_dual_axis_uses_independent_scales(gappy_records) -> None:
    """Wheat and wages get their own nice bounds."""

    chart = DualAxisChart(gappy_records, Tooltip())
    chart.render()

    assert chart.ax.get_ylim() == (0, nice_max(64.0))
    assert chart.ax_right.get_ylim() == (0, nice_max(7.5))


def test_dual_axis_isolated_wage_gets_marker_only(sample_records) -> None:
    """A lone wage between gaps has a marker but no line."""

    chart = DualAxisChart(sample_records, Tooltip())
    chart.render()

    assert chart.wage_lines == []
    assert len(chart.markers.get_offsets()) == 1


def test_purchasing_power_chart_uses_derived_records(gappy_records) -> None:
    """Only wage-present years are drawn, on a continuous year axis."""

    chart = PurchasingPowerChart(gappy_records, Tooltip())
    chart.render()

    assert [d.year for d in chart.pp] == [1565, 1570, 1575, 1585, 1590]
    assert chart.ax.get_xlim() == (1565, 1590)
    assert len(chart.markers.get_offsets()) == 5
    assert max(chart.pp_lines[0].get_ydata()) <= chart.y_max


def test_band_lookup_first_and_last(gappy_records) -> None:
    """Offset 0 is the first year; the full plot width is the last."""

    chart = ReproductionChart(gappy_records, Tooltip())
    chart.render()

    assert chart.nearest_record(0).year == 1565
    assert chart.nearest_record(chart.layout.inner_width).year == 1595


def test_pointer_move_shows_tooltip_at_pointer(gappy_records) -> None:
    """Moving over the plot area shows the nearest year's values."""

    tooltip = Tooltip()
    chart = ReproductionChart(gappy_records, tooltip)
    chart.render()

    event = _move(chart, chart.ax.bbox.x0 + 0.5)
    assert tooltip.visible
    assert tooltip.content.splitlines()[0] == "1565"
    assert tooltip.position == (event.x, event.y)

    _move(chart, chart.ax.bbox.x1 - 0.5)
    assert tooltip.content.splitlines()[0] == "1595"
    assert tooltip.content.splitlines()[2] == "Wages: missing shillings/week"


def test_pointer_move_on_dual_axis_chart(gappy_records) -> None:
    """The twin axes on top still resolve to the band lookup."""

    tooltip = Tooltip()
    chart = DualAxisChart(gappy_records, tooltip)
    chart.render()

    _move(chart, chart.ax.bbox.x0 + chart.x.center(1570))
    assert tooltip.content.splitlines()[0] == "1570"


def test_pointer_move_on_purchasing_power_chart(gappy_records) -> None:
    """Pixel offsets invert to a year, then the closest derived record."""

    tooltip = Tooltip()
    chart = PurchasingPowerChart(gappy_records, tooltip)
    chart.render()

    x_px, _ = chart.ax.transData.transform((1582, 0.1))
    _move(chart, x_px)

    lines = tooltip.content.splitlines()
    assert lines[0] == "1585"
    assert lines[3].startswith("Purchasing power: ")
    assert chart.nearest_record(chart.x(1578)).year == 1575


def test_pointer_in_margin_is_ignored(gappy_records) -> None:
    """Only the plot area reacts to the pointer."""

    tooltip = Tooltip()
    chart = ReproductionChart(gappy_records, tooltip)
    chart.render()

    _move(chart, 5, 5)

    assert not tooltip.visible


def test_pointer_leave_hides_without_clearing(gappy_records) -> None:
    """Leaving hides the tooltip but keeps its last content."""

    tooltip = Tooltip()
    chart = ReproductionChart(gappy_records, tooltip)
    chart.render()
    _move(chart, chart.ax.bbox.x0 + 1)

    canvas = chart.figure.canvas
    canvas.callbacks.process("figure_leave_event", LocationEvent("figure_leave_event", canvas, 0, 0))

    assert not tooltip.visible
    assert tooltip.content.startswith("1565")


def test_leave_on_other_chart_keeps_active_tooltip(gappy_records) -> None:
    """A stale leave from another chart does not hide the current tooltip."""

    tooltip = Tooltip()
    first, second, _ = render_all(gappy_records, tooltip)

    _move(second, second.ax.bbox.x0 + 1)
    first.on_leave(None)

    assert tooltip.visible
    assert tooltip.figure is second.figure


def test_rerender_does_not_duplicate_handlers(gappy_records, monkeypatch) -> None:
    """Each render replaces the previous pointer handlers."""

    tooltip = Tooltip()
    chart = ReproductionChart(gappy_records, tooltip)
    chart.render()
    chart.render()

    calls = []
    monkeypatch.setattr(tooltip, "show", lambda *args, **kwargs: calls.append(args))
    _move(chart, chart.ax.bbox.x0 + 1)

    assert len(calls) == 1


def test_empty_dataset_renders() -> None:
    """No records still produces three (empty) charts."""

    renderers = render_all([], Tooltip())

    assert len(renderers) == 3
    assert renderers[2].pp == []
    assert renderers[0].nearest_record(0) is None
