# -*- coding: utf-8 -*-
"""
wage_price_hover.py

Pointer interaction for the charts: the shared tooltip, nearest-record lookup
from a pointer position, and the tooltip text.

Two lookups:
  - by slot: band charts (one evenly spaced slot per year)
  - by year: continuous year axis (bisect over sorted years)
"""

from __future__ import annotations

import bisect
import math
from typing import Dict, Optional, Sequence, Tuple, TypeVar

from matplotlib.transforms import IdentityTransform

from wage_price_data import DerivedRecord, Record

T = TypeVar("T")

TOOLTIP_STYLE = {
    "boxstyle": "round,pad=0.4",
    "fc": "#fbf8ef",
    "ec": "#7a6f5a",
    "alpha": 0.95,
}


class Tooltip:
    """
    One transient overlay shared by every chart. Only one is visible at a
    time; the last chart to call show() owns it.
    """

    def __init__(self, fontsize: int = 9):
        self.content = ""
        self.position: Tuple[float, float] = (0.0, 0.0)
        self.visible = False
        self.figure = None
        self.fontsize = fontsize
        self._annotations: Dict[int, object] = {}

    def _annotation_for(self, figure):
        annot = self._annotations.get(id(figure))
        if annot is None or annot.figure is not figure:
            annot = figure.text(
                0,
                0,
                "",
                transform=IdentityTransform(),
                fontsize=self.fontsize,
                va="bottom",
                ha="left",
                bbox=TOOLTIP_STYLE,
                zorder=1000,
                visible=False,
            )
            self._annotations[id(figure)] = annot
        return annot

    def show(self, content: str, position: Tuple[float, float], figure=None) -> None:
        """position is in figure pixels (matplotlib display coords)."""
        if self.figure is not None and self.figure is not figure:
            self._set_artist_visible(self.figure, False)

        self.content = content
        self.position = position
        self.visible = True
        self.figure = figure

        if figure is None:
            return
        annot = self._annotation_for(figure)
        annot.set_text(content)
        annot.set_position((position[0] + 12, position[1] + 12))
        annot.set_visible(True)
        figure.canvas.draw_idle()

    def hide(self) -> None:
        self.visible = False
        if self.figure is not None:
            self._set_artist_visible(self.figure, False)

    def forget(self, figure) -> None:
        """Drop the artist of a figure that is being cleared."""
        self._annotations.pop(id(figure), None)
        if self.figure is figure:
            self.figure = None
            self.visible = False

    def _set_artist_visible(self, figure, visible: bool) -> None:
        annot = self._annotations.get(id(figure))
        if annot is None:
            return
        annot.set_visible(visible)
        figure.canvas.draw_idle()


# ============================================================
# NEAREST RECORD
# ============================================================
def nearest_index_by_slot(offset: float, plot_width: float, count: int) -> Optional[int]:
    """Slot index under a pixel offset, clamped to [0, count - 1]."""
    if count <= 0 or plot_width <= 0:
        return None
    slot = plot_width / count
    idx = int(math.floor(offset / slot + 0.5))
    return max(0, min(count - 1, idx))


def nearest_by_year(records: Sequence[T], year: float) -> Optional[T]:
    """
    Record whose year is closest to `year`. Records must be sorted by year.
    The earlier neighbour wins only when strictly closer.
    """
    if not records:
        return None
    years = [r.year for r in records]
    i = bisect.bisect_left(years, year)
    a = records[max(0, i - 1)]
    b = records[min(len(records) - 1, i)]
    if abs(a.year - year) < abs(b.year - year):
        return a
    return b


# ============================================================
# TEXT
# ============================================================
def format_record_tooltip(record: Record) -> str:
    wage_text = "missing" if record.wages is None else f"{record.wages:.2f}"
    return (
        f"{record.year:d}\n"
        f"Wheat: {record.wheat:.1f} shillings/quarter\n"
        f"Wages: {wage_text} shillings/week"
    )


def format_purchasing_power_tooltip(record: DerivedRecord) -> str:
    return (
        f"{record.year:d}\n"
        f"Wheat: {record.wheat:.1f} shillings/quarter\n"
        f"Wages: {record.wages:.2f} shillings/week\n"
        f"Purchasing power: {record.pp_quarters:.3f} quarters/week\n"
        f"({record.pp_kg:.2f} kg/week)"
    )
