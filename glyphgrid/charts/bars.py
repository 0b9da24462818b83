"""
Bar charts: single series (BarCanvas) and grouped series (BarGrouper).

Bars grow up from row 0. A bar at least three columns wide is drawn framed:

     ___
    |###|
    |###|
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

import numpy as np

from ..core.brush import AREA, BORDER_LEFT, BORDER_RIGHT, BORDER_TOP, SYMBOL_BRUSHES, Brush
from ..core.errors import InconsistentData
from ..core.position import Offset, Position
from ..canvas.canvas import Canvas, PlotMetadata

logger = logging.getLogger(__name__)


def format_value(value, precision: int = 0) -> str:
    """Integers verbatim; floats fixed-point with trailing zeros stripped."""
    if isinstance(value, (int, np.integer)) and not isinstance(value, bool):
        return str(int(value))
    text = f"{float(value):.{max(0, precision)}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


@dataclass
class Bar:
    """One bar: left column, width and height in cells, plus its label."""
    column: int = 0
    width: int = 0
    height: int = 0
    name: str = ""
    brush: Optional[Brush] = None
    empty: bool = False

    @property
    def is_empty(self) -> bool:
        return self.empty or (self.width == 0 and self.height == 0)

    @classmethod
    def spacer(cls, column: int = 0, width: int = 0) -> "Bar":
        """Spacer occupying columns but drawing nothing."""
        return cls(column=column, width=width, empty=True)


class BarCanvas(Canvas):
    """Canvas with bar drawing and bar-label helpers."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.bars: list[Bar] = []

    def draw_bar(self, col: int, width: int, height: int, brush: Optional[Brush] = None) -> "BarCanvas":
        if width <= 0:
            return self
        area = brush or self.palette.get(AREA)
        cap = self.palette.get(BORDER_TOP)
        right = col + width - 1

        if width < 3:
            self._paint_region(col, right, 0, height - 1, area)
        else:
            self._paint_region(col, col, 0, height - 1, self.palette.get(BORDER_LEFT))
            self._paint_region(right, right, 0, height - 1, self.palette.get(BORDER_RIGHT))
            self._paint_region(col + 1, right - 1, 0, height - 1, area)
        self._paint_region(col, right, height, height, cap)
        return self

    def draw_bars(self, bars: Sequence[Bar]) -> "BarCanvas":
        for bar in bars:
            if not bar.empty:
                self.draw_bar(bar.column, bar.width, bar.height, bar.brush)
        return self

    def plot_bars(self, bars: Sequence[Bar]) -> "BarCanvas":
        """Draw bars and keep the non-empty ones for draw_bar_labels, replacing earlier ones."""
        self.bars = [bar for bar in bars if not bar.is_empty]
        return self.draw_bars(bars)

    def plot_bars_xy(
        self,
        x: Sequence[float],
        y: Sequence[float],
        label: str = "",
        brush: Optional[Brush] = None,
    ) -> "BarCanvas":
        """One bar per (x, y) pair, centred on x, as wide as the smallest x gap."""
        if len(x) != len(y):
            raise InconsistentData()
        if len(x) == 0:
            return self
        xs = np.asarray(x, dtype=float)
        ys = np.asarray(y, dtype=float)

        distinct = np.unique(xs)
        gap = float(np.diff(distinct).min()) if distinct.size > 1 else 1.0
        self.set_xlimits(distinct[0] - gap, distinct[-1] + gap)
        self.set_ylimits(min(0.0, float(ys.min())), float(ys.max()) * 1.05)

        brush = brush or self.palette.get(AREA)
        bar_width = int(gap / self.xstep)
        bars = []
        for xv, yv, raw in zip(xs, ys, y):
            bars.append(Bar(
                column=int((xv - self.xlim_left) / self.xstep - bar_width / 2),
                width=bar_width,
                height=int((yv - self.ylim_bottom) / self.ystep),
                name=format_value(raw, self.config.bar_value_precision),
                brush=brush,
            ))
        self.metadata.append(PlotMetadata(brush, label, len(bars)))
        return self.plot_bars(bars)

    def plot_bars_values(self, y: Sequence[float], label: str = "", brush: Optional[Brush] = None) -> "BarCanvas":
        return self.plot_bars_xy(list(range(1, len(y) + 1)), y, label, brush)

    def plot_bars_mapping(self, data: Mapping, label: str = "", brush: Optional[Brush] = None) -> "BarCanvas":
        return self.plot_bars_xy(list(data.keys()), list(data.values()), label, brush)

    def draw_bar_labels(self, offset=Offset()) -> "BarCanvas":
        """Centre each stored bar's label over it, at its cap row plus offset."""
        for bar in self.bars:
            position = Position.at(bar.column + bar.width // 2, bar.height) + offset
            self.draw_text_centered(bar.name, position, adjust=False)
        return self


@dataclass
class _Series:
    values: list
    label: str
    brush: Brush
    is_integer: bool


class BarGrouper:
    """
    Collects series and lays them out as grouped bars.

    Group i holds the i-th value of every series; groups are separated by
    one empty bar.
    """

    def __init__(self, canvas: BarCanvas, brushes: Sequence[Brush] = SYMBOL_BRUSHES):
        self.canvas = canvas
        self.brushes = list(brushes)
        self.group_size = 0
        self.ngroups = 0
        self.series: list[_Series] = []
        self._next_brush = 0

    def add(self, ydata: Sequence[float], label: str = "", brush: Optional[Brush] = None) -> "BarGrouper":
        values = list(ydata)
        ngroups = max(self.ngroups, len(values))
        if (self.group_size + 1) * ngroups - 1 > self.canvas.width:
            logger.debug("Dropping series %r: %d groups do not fit in %d columns",
                         label, ngroups, self.canvas.width)
            return self

        if brush is None:
            brush = self.brushes[self._next_brush % len(self.brushes)]
            self._next_brush += 1

        if values:
            canvas = self.canvas
            low, high = float(min(values)), float(max(values))
            canvas.set_ylimits(min(canvas.ylim_bottom, low), max(canvas.ylim_top, high))

        is_integer = all(isinstance(v, (int, np.integer)) and not isinstance(v, bool) for v in values)
        self.series.append(_Series(values, label, brush, is_integer))
        self.canvas.metadata.append(PlotMetadata(brush, label, len(values)))
        self.group_size += 1
        self.ngroups = ngroups
        return self

    def commit(self, height_resize: Optional[float] = None) -> BarCanvas:
        canvas = self.canvas
        if self.group_size == 0 or self.ngroups == 0:
            return canvas
        if height_resize is None:
            height_resize = canvas.config.height_resize

        n_bars = self.ngroups * self.group_size + self.ngroups - 1
        width = canvas.width // n_bars
        precision = canvas.config.bar_value_precision

        bars: list[Bar] = []
        column = 0
        for i in range(self.ngroups):
            for series in self.series:
                if i < len(series.values):
                    value = series.values[i]
                    bars.append(Bar(
                        column=column,
                        width=width,
                        height=int((value - canvas.ylim_bottom) / canvas.ystep * height_resize),
                        name=str(int(value)) if series.is_integer else format_value(value, precision),
                        brush=series.brush,
                    ))
                else:
                    bars.append(Bar.spacer(column, width))
                column += width
            if i != self.ngroups - 1:
                bars.append(Bar.spacer(column, width))
                column += width
        return canvas.plot_bars(bars)
