# -*- coding: utf-8 -*-
"""
wage_price_charts.py

The three wheat/wages figures:

  ReproductionChart     ("chart")   wheat bars + wage area/line on one scale
  DualAxisChart         ("chart2")  wheat bars (left) + wage line (right),
                                    broken at every missing wage
  PurchasingPowerChart  ("chart3")  wages / wheat on a continuous year axis

Each renderer owns its figure, axes, scales and data, and handles its own
pointer events; all of them write to one shared Tooltip.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import matplotlib.pyplot as plt
from matplotlib.ticker import FormatStrFormatter, MaxNLocator

from wage_price_data import Record, derive_purchasing_power, wage_records
from wage_price_hover import (
    Tooltip,
    format_purchasing_power_tooltip,
    format_record_tooltip,
    nearest_by_year,
    nearest_index_by_slot,
)
from wage_price_scales import (
    DPI,
    NICE_STEPS,
    BandScale,
    ChartLayout,
    LinearScale,
    defined_runs,
    monotone_curve,
    nice_max,
    value_ticks,
    year_tick_values,
)


# ============================================================
# CONFIG
# ============================================================
PALETTE = {
    "bar": "#c8bfa8",
    "outline": "#3d3a33",
    "line": "#b2452f",
    "area": (0.698, 0.271, 0.184, 0.22),
    "grid": "#dcd6c8",
    "pp_line": (120 / 255, 220 / 255, 140 / 255, 1.0),
    "pp_area": (120 / 255, 220 / 255, 140 / 255, 0.18),
}

Y_TICKS = 8
X_TICKS_CONTINUOUS = 10


def marker_size(radius_px: float) -> float:
    """Scatter size (points^2) for a circle of the given pixel radius."""
    return (2 * radius_px * 72.0 / DPI) ** 2


class ChartRenderer:
    target_id = ""
    layout = ChartLayout(top=26, right=26, bottom=54, left=70)

    def __init__(self, records: Sequence[Record], tooltip: Tooltip, figure=None):
        self.records = tuple(records)
        self.tooltip = tooltip
        self.figure = figure
        self.ax = None
        self._cids: List[int] = []

    # ---------- drawing ----------
    def render(self):
        """Clear the figure and redraw every layer."""
        if self.figure is None:
            self.figure = plt.figure(num=self.target_id, figsize=self.layout.figsize, dpi=DPI)
        fig = self.figure

        self._disconnect()
        self.tooltip.forget(fig)
        fig.clf()
        self.layout.apply(fig)
        self.ax = fig.add_subplot(111)
        self.draw()
        self._connect()
        return fig

    def draw(self) -> None:
        raise NotImplementedError

    def draw_value_axis(self, ax, upper: float, grid: bool = True) -> None:
        ax.set_ylim(0, upper)
        ax.set_yticks(value_ticks(upper, Y_TICKS))
        if grid:
            ax.yaxis.grid(True, color=PALETTE["grid"], linewidth=0.8)
            ax.set_axisbelow(True)

    def label(self, text: str, dx: float, ha: str = "left") -> None:
        """Axis caption above the plot area, dx pixels from its left edge."""
        self.ax.annotate(
            text,
            xy=(0, 1),
            xycoords="axes fraction",
            xytext=(dx, 10),
            textcoords="offset pixels",
            ha=ha,
            va="bottom",
            fontsize=10,
        )

    def label_year(self) -> None:
        self.ax.annotate(
            "Year",
            xy=(0.5, 0),
            xycoords="axes fraction",
            xytext=(0, -44),
            textcoords="offset pixels",
            ha="center",
            va="baseline",
            fontsize=10,
        )

    # ---------- pointer ----------
    @property
    def plot_axes(self):
        return (self.ax,)

    def _connect(self) -> None:
        canvas = self.figure.canvas
        self._cids = [
            canvas.mpl_connect("motion_notify_event", self.on_motion),
            canvas.mpl_connect("axes_leave_event", self.on_leave),
            canvas.mpl_connect("figure_leave_event", self.on_leave),
        ]

    def _disconnect(self) -> None:
        if self.figure is None:
            return
        for cid in self._cids:
            self.figure.canvas.mpl_disconnect(cid)
        self._cids = []

    def pointer_offset(self, event) -> Optional[float]:
        """Pointer x inside the plot area, in layout pixels."""
        if self.ax is None or event.x is None or event.inaxes is None or event.inaxes not in self.plot_axes:
            return None
        bbox = self.ax.bbox
        if bbox.width <= 0:
            return None
        return (event.x - bbox.x0) * self.layout.inner_width / bbox.width

    def nearest_record(self, offset: float):
        raise NotImplementedError

    def tooltip_text(self, record) -> str:
        return format_record_tooltip(record)

    def on_motion(self, event) -> None:
        offset = self.pointer_offset(event)
        if offset is None:
            return
        record = self.nearest_record(offset)
        if record is None:
            return
        self.tooltip.show(self.tooltip_text(record), (event.x, event.y), self.figure)

    def on_leave(self, event) -> None:
        if self.tooltip.figure in (None, self.figure):
            self.tooltip.hide()


class BandChart(ChartRenderer):
    """Shared bits of the two charts with one slot per year."""

    def band_scale(self) -> BandScale:
        return BandScale([r.year for r in self.records], (0, self.layout.inner_width))

    def draw_year_axis(self, x: BandScale) -> None:
        ax = self.ax
        ax.set_xlim(0, self.layout.inner_width)
        ticks = year_tick_values(x.domain)
        ax.set_xticks([x.center(y) for y in ticks])
        ax.set_xticklabels([f"{y:d}" for y in ticks])
        self.label_year()

    def draw_bars(self, ax, x: BandScale):
        return ax.bar(
            [x(r.year) for r in self.records],
            [r.wheat for r in self.records],
            width=x.bandwidth,
            align="edge",
            color=PALETTE["bar"],
            edgecolor=PALETTE["outline"],
            linewidth=1,
            zorder=4,
            gid="wheat-bars",
        )

    def nearest_record(self, offset: float) -> Optional[Record]:
        idx = nearest_index_by_slot(offset, self.layout.inner_width, len(self.records))
        if idx is None:
            return None
        return self.records[idx]


class ReproductionChart(BandChart):
    target_id = "chart"
    layout = ChartLayout(top=26, right=26, bottom=54, left=70)

    def draw(self) -> None:
        ax = self.ax
        self.x = x = self.band_scale()
        top = max((max(r.wheat, r.wages or 0) for r in self.records), default=None)
        self.y_max = nice_max(top)

        self.draw_value_axis(ax, self.y_max)
        self.draw_year_axis(x)
        self.label("Shillings", -48)

        wages = wage_records(self.records)
        self.wage_area = None
        self.wage_lines = []
        if wages:
            sx, sy = monotone_curve([x.center(r.year) for r in wages], [r.wages for r in wages])
            self.wage_area = ax.fill_between(sx, 0, sy, color=PALETTE["area"], linewidth=0, zorder=2)
            self.wage_lines = ax.plot(sx, sy, color=PALETTE["line"], linewidth=3.25, zorder=3, gid="wage-line")

        self.bars = self.draw_bars(ax, x)


class DualAxisChart(BandChart):
    target_id = "chart2"
    layout = ChartLayout(top=26, right=80, bottom=54, left=80)

    def __init__(self, records, tooltip, figure=None):
        super().__init__(records, tooltip, figure)
        self.ax_right = None

    @property
    def plot_axes(self):
        return (self.ax, self.ax_right)

    def draw(self) -> None:
        ax = self.ax
        self.x = x = self.band_scale()
        wages = wage_records(self.records)
        self.y_left_max = nice_max(max((r.wheat for r in self.records), default=None))
        self.y_right_max = nice_max(max((r.wages for r in wages), default=None))

        self.draw_value_axis(ax, self.y_left_max)
        self.draw_year_axis(x)

        self.ax_right = ax.twinx()
        self.draw_value_axis(self.ax_right, self.y_right_max, grid=False)

        self.label("Wheat price (shillings / quarter)", -70)
        self.label("Wages (shillings / week)", self.layout.inner_width - 50)

        self.bars = self.draw_bars(ax, x)

        # One curve per run of present wages: never joined across a gap.
        centers = [x.center(r.year) for r in self.records]
        self.wage_lines = []
        for xs, ys in defined_runs(centers, [r.wages for r in self.records]):
            if len(xs) < 2:
                continue
            sx, sy = monotone_curve(xs, ys)
            self.wage_lines.extend(
                self.ax_right.plot(sx, sy, color=PALETTE["line"], linewidth=3.0, zorder=5, gid="wage-line")
            )

        self.markers = self.ax_right.scatter(
            [x.center(r.year) for r in wages],
            [r.wages for r in wages],
            s=marker_size(2.2),
            color=PALETTE["line"],
            zorder=6,
        )


class PurchasingPowerChart(ChartRenderer):
    target_id = "chart3"
    layout = ChartLayout(top=26, right=26, bottom=54, left=90)

    def draw(self) -> None:
        ax = self.ax
        self.pp = derive_purchasing_power(self.records)

        if self.pp:
            lo, hi = self.pp[0].year, self.pp[-1].year
        else:
            lo, hi = 0, 1
        if lo == hi:
            lo, hi = lo - 1, hi + 1
        self.x = LinearScale((lo, hi), (0, self.layout.inner_width))
        self.y_max = nice_max(max((d.pp_quarters for d in self.pp), default=None))

        ax.set_xlim(lo, hi)
        self.draw_value_axis(ax, self.y_max)
        ax.xaxis.set_major_locator(MaxNLocator(nbins=X_TICKS_CONTINUOUS, steps=NICE_STEPS, integer=True))
        ax.xaxis.set_major_formatter(FormatStrFormatter("%d"))

        self.label("Purchasing power (quarters/week)", -70)
        self.label_year()

        years = [d.year for d in self.pp]
        self.pp_area = None
        self.pp_lines = []
        if self.pp:
            sx, sy = monotone_curve(years, [d.pp_quarters for d in self.pp])
            self.pp_area = ax.fill_between(sx, 0, sy, color=PALETTE["pp_area"], linewidth=0, zorder=2)
            self.pp_lines = ax.plot(sx, sy, color=PALETTE["pp_line"], linewidth=3, zorder=3, gid="pp-line")
        self.markers = ax.scatter(
            years,
            [d.pp_quarters for d in self.pp],
            s=marker_size(2.4),
            color=PALETTE["pp_line"],
            zorder=4,
        )

    def nearest_record(self, offset: float):
        return nearest_by_year(self.pp, self.x.invert(offset))

    def tooltip_text(self, record) -> str:
        return format_purchasing_power_tooltip(record)


CHARTS = (ReproductionChart, DualAxisChart, PurchasingPowerChart)


def render_all(records: Sequence[Record], tooltip: Tooltip, figures=None) -> List[ChartRenderer]:
    """Draw the three charts one after another from the same records."""
    figures = list(figures) if figures is not None else [None] * len(CHARTS)
    renderers = [cls(records, tooltip, figure=fig) for cls, fig in zip(CHARTS, figures)]
    for r in renderers:
        r.render()
    return renderers
