# -*- coding: utf-8 -*-
"""
wage_price_scales.py

Layout and data-to-pixel mapping for the wheat/wages charts.

Every chart is drawn on a 1100 x 560 logical-unit canvas with per-chart
margins; the plot area ("inner" box) is what the axes occupy. Band charts put
their x data coordinates in inner-box pixels so bars, ticks and pointer
offsets share one unit.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
from matplotlib.ticker import MaxNLocator
from scipy.interpolate import PchipInterpolator


# ============================================================
# CONFIG
# ============================================================
DPI = 100
CANVAS_W = 1100
CANVAS_H = 560

PADDING_INNER = 0.18
PADDING_OUTER = 0.06

NICE_STEPS = [1, 2, 5, 10]
YEAR_STRIDE = 25


@dataclass(frozen=True)
class ChartLayout:
    top: float
    right: float
    bottom: float
    left: float
    width: float = CANVAS_W
    height: float = CANVAS_H

    @property
    def inner_width(self) -> float:
        return self.width - self.left - self.right

    @property
    def inner_height(self) -> float:
        return self.height - self.top - self.bottom

    @property
    def figsize(self) -> Tuple[float, float]:
        return (self.width / DPI, self.height / DPI)

    def apply(self, figure) -> None:
        """Size the figure and pin the subplot box to the plot area."""
        figure.set_size_inches(*self.figsize)
        figure.subplots_adjust(
            left=self.left / self.width,
            right=1.0 - self.right / self.width,
            bottom=self.bottom / self.height,
            top=1.0 - self.top / self.height,
        )


class BandScale:
    """
    Categorical position scale: one evenly spaced slot per domain value.

    Slots are laid out the usual band way: the range is split into
    n - padding_inner + 2 * padding_outer steps, and the bands are centred.
    """

    def __init__(
        self,
        domain: Sequence,
        range: Tuple[float, float],
        padding_inner: float = PADDING_INNER,
        padding_outer: float = PADDING_OUTER,
        align: float = 0.5,
    ):
        self.domain = list(dict.fromkeys(domain))
        self.range = range
        self.padding_inner = padding_inner
        self.padding_outer = padding_outer
        self.align = align
        self._index = {v: i for i, v in enumerate(self.domain)}

        n = len(self.domain)
        start, stop = sorted(range)
        self.step = (stop - start) / max(1, n - padding_inner + padding_outer * 2)
        self.start = start + (stop - start - self.step * (n - padding_inner)) * align
        self.bandwidth = self.step * (1 - padding_inner)

    def __call__(self, value) -> Optional[float]:
        i = self._index.get(value)
        if i is None:
            return None
        return self.start + self.step * i

    def center(self, value) -> Optional[float]:
        left = self(value)
        if left is None:
            return None
        return left + self.bandwidth / 2


class LinearScale:
    def __init__(self, domain: Tuple[float, float], range: Tuple[float, float]):
        self.domain = domain
        self.range = range

    def __call__(self, v: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            return (r0 + r1) / 2
        return r0 + (v - d0) / (d1 - d0) * (r1 - r0)

    def invert(self, p: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if r1 == r0:
            return (d0 + d1) / 2
        return d0 + (p - r0) / (r1 - r0) * (d1 - d0)


# ============================================================
# TICKS
# ============================================================
def nice_max(value: Optional[float], count: int = 10) -> float:
    """Round [0, value] outward so the top lands on a tick."""
    if value is None or not math.isfinite(value) or value <= 0:
        return 1.0
    ticks = MaxNLocator(nbins=count, steps=NICE_STEPS).tick_values(0.0, float(value))
    return float(max(ticks))


def value_ticks(upper: float, count: int = 8) -> List[float]:
    ticks = MaxNLocator(nbins=count, steps=NICE_STEPS).tick_values(0.0, upper)
    eps = abs(upper) * 1e-9
    return [float(t) for t in ticks if -eps <= t <= upper + eps]


def year_tick_values(years: Sequence[int], stride: int = YEAR_STRIDE) -> List[int]:
    if not years:
        return []
    first, last = years[0], years[-1]
    return [y for y in years if (y - first) % stride == 0 or y == last]


# ============================================================
# PATHS
# ============================================================
def monotone_curve(xs: Sequence[float], ys: Sequence[float], samples: int = 16) -> Tuple[np.ndarray, np.ndarray]:
    """
    Densify a series with a monotone cubic (PCHIP) so the smoothed line never
    overshoots between points. xs must be ascending; a repeated x keeps its
    first point.
    """
    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)
    x, first = np.unique(x, return_index=True)
    y = y[first]
    if len(x) < 2:
        return x, y
    dense = np.linspace(x[0], x[-1], (len(x) - 1) * samples + 1)
    return dense, PchipInterpolator(x, y)(dense)


def defined_runs(xs: Sequence[float], ys: Sequence[Optional[float]]) -> List[Tuple[List[float], List[float]]]:
    """Split (x, y) pairs into maximal runs where y is present."""
    runs: List[Tuple[List[float], List[float]]] = []
    cur_x: List[float] = []
    cur_y: List[float] = []
    for x, y in zip(xs, ys):
        if y is None:
            if cur_x:
                runs.append((cur_x, cur_y))
                cur_x, cur_y = [], []
            continue
        cur_x.append(x)
        cur_y.append(y)
    if cur_x:
        runs.append((cur_x, cur_y))
    return runs
