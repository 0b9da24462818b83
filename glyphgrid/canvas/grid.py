"""
GridCanvas - a canvas partitioned into rows x cols bands that delegate to
caller-owned sub-canvases.

Grid row 0 is the TOP band. A cell whose band has no sub-canvas assigned is
read from and written to the grid's own storage. The grid holds references
only: the caller keeps every sub-canvas alive and may keep drawing on it.
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from typing import Optional, Sequence

import numpy as np

from ..core.brush import Brush
from ..core.config import CanvasConfig, TerminalSize
from ..core.errors import InvalidPlotSize
from .canvas import Canvas, Cell

logger = logging.getLogger(__name__)


def _split(total: int, parts: int, sizes: Optional[Sequence[int]]) -> list[int]:
    if sizes is not None:
        sizes = [int(s) for s in sizes]
        if len(sizes) == parts and sum(sizes) == total and all(s > 0 for s in sizes):
            return sizes
        logger.debug("Ignoring band sizes %s (need %d bands summing to %d)", sizes, parts, total)
    base, rem = divmod(total, parts)
    return [base + (1 if i < rem else 0) for i in range(parts)]


class GridCanvas(Canvas):
    """Canvas whose cells are routed to per-band sub-canvases."""

    def __init__(
        self,
        rows: int,
        cols: int,
        width: int = 0,
        height: int = 0,
        config: Optional[CanvasConfig] = None,
        terminal_size: Optional[TerminalSize] = None,
        widths: Optional[Sequence[int]] = None,
        heights: Optional[Sequence[int]] = None,
    ):
        super().__init__(width, height, config, terminal_size)
        if rows < 1 or cols < 1 or rows > self.height or cols > self.width:
            raise InvalidPlotSize("A grid needs at least one row and column, and no more than its size.")
        self.grid_rows = rows
        self.grid_cols = cols
        self.widths = _split(self.width, cols, widths)
        self.heights = _split(self.height, rows, heights)

        # First canvas column of each grid column
        self._col_starts = [sum(self.widths[:i]) for i in range(cols)]
        # First canvas row of each band, bottom band first (grid row rows-1)
        self._row_starts = [sum(self.heights[j + 1:]) for j in range(rows - 1, -1, -1)]

        self.plots: list[Optional[Canvas]] = [None] * (rows * cols)

    # -------------------------------------------------------------------------
    # Band lookup
    # -------------------------------------------------------------------------

    def locate(self, col: int, row: int) -> tuple[int, int, int, int]:
        """(grid_row, grid_col, local_col, local_row) of an in-bounds cell."""
        i = bisect_right(self._col_starts, col) - 1
        k = bisect_right(self._row_starts, row) - 1
        grid_row = self.grid_rows - 1 - k
        return grid_row, i, col - self._col_starts[i], row - self._row_starts[k]

    def band_origin(self, grid_row: int, grid_col: int) -> tuple[int, int]:
        """Canvas (col, row) of a band's lower-left cell."""
        return self._col_starts[grid_col], self._row_starts[self.grid_rows - 1 - grid_row]

    def _index(self, grid_row: int, grid_col: int) -> int:
        if not (0 <= grid_row < self.grid_rows and 0 <= grid_col < self.grid_cols):
            raise IndexError(f"Grid cell ({grid_row}, {grid_col}) out of range")
        return grid_row * self.grid_cols + grid_col

    # -------------------------------------------------------------------------
    # Sub-canvases
    # -------------------------------------------------------------------------

    def set_canvas_at(self, grid_row: int, grid_col: int, canvas: Optional[Canvas]) -> "GridCanvas":
        self.plots[self._index(grid_row, grid_col)] = canvas
        return self

    def get(self, grid_row: int, grid_col: int) -> Optional[Canvas]:
        return self.plots[self._index(grid_row, grid_col)]

    def in_row_major(self) -> "GridSetter":
        return GridSetter(self, column_major=False)

    def in_column_major(self) -> "GridSetter":
        return GridSetter(self, column_major=True)

    # -------------------------------------------------------------------------
    # Cell routing
    # -------------------------------------------------------------------------

    def at(self, col: int, row: int) -> Cell:
        if not self.in_bounds(col, row):
            return super().at(col, row)
        grid_row, grid_col, local_col, local_row = self.locate(col, row)
        sub = self.plots[grid_row * self.grid_cols + grid_col]
        if sub is None:
            return super().at(col, row)
        return sub.at(local_col, local_row)

    def put(self, col: int, row: int, brush: Brush) -> None:
        if not self.in_bounds(col, row):
            return
        grid_row, grid_col, local_col, local_row = self.locate(col, row)
        sub = self.plots[grid_row * self.grid_cols + grid_col]
        if sub is None:
            super().put(col, row, brush)
        else:
            sub.put(local_col, local_row, brush)

    def _paint_region(self, col_beg, col_end, row_beg, row_end, brush):
        for col in range(max(0, col_beg), min(self.width - 1, col_end) + 1):
            for row in range(max(0, row_beg), min(self.height - 1, row_end) + 1):
                self.put(col, row, brush)

    def _write_block(self, col, row, glyphs, styles, mask=None):
        w, h = glyphs.shape
        for i in range(w):
            for j in range(h):
                if mask is None or mask[i, j]:
                    self.put(col + i, row + j, Brush(glyphs[i, j], styles[i, j]))

    def _snapshot_arrays(self) -> tuple[np.ndarray, np.ndarray]:
        glyphs = self.glyphs.copy()
        styles = self.styles.copy()
        for index, sub in enumerate(self.plots):
            if sub is None:
                continue
            grid_row, grid_col = divmod(index, self.grid_cols)
            col0, row0 = self.band_origin(grid_row, grid_col)
            band_w, band_h = self.widths[grid_col], self.heights[grid_row]

            # Cells outside a smaller sub-canvas read as its blank
            blank = sub.palette.blank
            glyphs[col0:col0 + band_w, row0:row0 + band_h] = blank.value
            styles[col0:col0 + band_w, row0:row0 + band_h] = blank.name

            w, h = min(band_w, sub.width), min(band_h, sub.height)
            sub_glyphs, sub_styles = sub._snapshot_arrays()
            glyphs[col0:col0 + w, row0:row0 + h] = sub_glyphs[:w, :h]
            styles[col0:col0 + w, row0:row0 + h] = sub_styles[:w, :h]
        return glyphs, styles

    def redraw(self) -> "GridCanvas":
        super().redraw()
        for sub in self.plots:
            if sub is not None:
                sub.redraw()
        return self

    def __repr__(self) -> str:
        return (
            f"GridCanvas(rows={self.grid_rows}, cols={self.grid_cols}, "
            f"width={self.width}, height={self.height})"
        )


class GridSetter:
    """Assigns sub-canvases to successive grid cells; extra calls are ignored."""

    def __init__(self, grid: GridCanvas, column_major: bool = False):
        self.grid = grid
        self.column_major = column_major
        self.index = 0

    def __call__(self, canvas: Optional[Canvas]) -> "GridSetter":
        total = self.grid.grid_rows * self.grid.grid_cols
        if self.index >= total:
            logger.debug("Grid is full, ignoring canvas %r", canvas)
            return self
        if self.column_major:
            grid_col, grid_row = divmod(self.index, self.grid.grid_rows)
        else:
            grid_row, grid_col = divmod(self.index, self.grid.grid_cols)
        self.grid.set_canvas_at(grid_row, grid_col, canvas)
        self.index += 1
        return self

    def done(self) -> GridCanvas:
        return self.grid
