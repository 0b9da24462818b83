"""
Canvas - a fixed-size grid of glyph cells and its drawing primitives.

Core design:
- Cell: (style, glyph) pair; style is a brush name or None for anonymous glyphs
- Canvas: width x height cells, addressed (col, row) with row 0 at the bottom
- Fusion: overlays one canvas onto another at a resolved position

Every drawing method returns the canvas, so calls chain:

    text = (
        Canvas(40, 10)
        .draw_borders()
        .draw_text_centered("hello", Anchor.CENTER)
        .serialize()
    )
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

from ..core.brush import (
    AREA,
    BLANK,
    BORDER_BOTTOM,
    BORDER_LEFT,
    BORDER_RIGHT,
    BORDER_TOP,
    LINE_HORIZONTAL,
    LINE_VERTICAL,
    MAIN,
    Brush,
    Palette,
)
from ..core.config import CanvasConfig, TerminalSize, resolve_canvas_size
from ..core.errors import InconsistentData
from ..core.position import (
    Anchor,
    Borders,
    Offset,
    Position,
    PositionLike,
    adjust_for_bounded_box,
    as_position,
    calc_box_position,
    resolve_absolute,
)
from .gamma import FixedGamma, Gamma

if TYPE_CHECKING:
    from .image import Image


# =============================================================================
# Cells and metadata
# =============================================================================

@dataclass(frozen=True)
class Cell:
    """A single canvas cell: the style that owns it and the glyph it shows."""
    style: Optional[str]
    glyph: str

    @property
    def brush(self) -> Brush:
        return Brush(self.glyph, self.style)

    @property
    def is_blank(self) -> bool:
        return self.style == BLANK


@dataclass
class PlotMetadata:
    """Legend entry registered by a plotting call."""
    brush: Brush
    label: str = ""
    length: int = 0


# =============================================================================
# Canvas
# =============================================================================

class Canvas:
    """2D grid of glyph cells for drawing."""

    def __init__(
        self,
        width: int = 0,
        height: int = 0,
        config: Optional[CanvasConfig] = None,
        terminal_size: Optional[TerminalSize] = None,
    ):
        self.width, self.height = resolve_canvas_size(width, height, terminal_size)
        self.config = config or CanvasConfig()
        self.palette = Palette(self.config.brushes)

        blank = self.palette.blank
        self.glyphs = np.full((self.width, self.height), blank.value, dtype=object)
        self.styles = np.full((self.width, self.height), blank.name, dtype=object)

        self.name = ""
        self.title = ""
        self.autolimit = Borders.ALL
        self.xlim_margin = self.config.xlim_margin
        self.ylim_margin = self.config.ylim_margin
        self.xlim_left, self.xlim_right = 0.0, 1.0
        self.ylim_bottom, self.ylim_top = 0.0, 1.0
        self.metadata: list[PlotMetadata] = []

    # -------------------------------------------------------------------------
    # Cell access
    # -------------------------------------------------------------------------

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.width and 0 <= row < self.height

    def at(self, col: int, row: int) -> Cell:
        """Cell at (col, row). Out of bounds reads return a blank cell."""
        if self.in_bounds(col, row):
            return Cell(self.styles[col, row], self.glyphs[col, row])
        blank = self.palette.blank
        return Cell(blank.name, blank.value)

    def put(self, col: int, row: int, brush: Brush) -> None:
        """Paint one cell. Out of bounds writes are ignored."""
        if self.in_bounds(col, row):
            self.glyphs[col, row] = brush.value
            self.styles[col, row] = brush.name

    def __getitem__(self, pos: tuple[int, int]) -> Cell:
        col, row = pos
        return self.at(col, row)

    def __setitem__(self, pos: tuple[int, int], brush: Brush):
        col, row = pos
        self.put(col, row, brush)

    def _snapshot_arrays(self) -> tuple[np.ndarray, np.ndarray]:
        """(glyphs, styles) arrays of shape (width, height) as currently displayed."""
        return self.glyphs, self.styles

    def _write_block(
        self,
        col: int,
        row: int,
        glyphs: np.ndarray,
        styles: np.ndarray,
        mask: Optional[np.ndarray] = None,
    ) -> None:
        """Copy an in-bounds block of cells with its lower-left corner at (col, row)."""
        w, h = glyphs.shape
        dst_glyphs = self.glyphs[col:col + w, row:row + h]
        dst_styles = self.styles[col:col + w, row:row + h]
        if mask is None:
            dst_glyphs[...] = glyphs
            dst_styles[...] = styles
        else:
            dst_glyphs[mask] = glyphs[mask]
            dst_styles[mask] = styles[mask]

    def _paint_region(self, col_beg: int, col_end: int, row_beg: int, row_end: int, brush: Brush) -> None:
        """Paint the inclusive rectangle [col_beg, col_end] x [row_beg, row_end], clipped."""
        c0, c1 = max(0, col_beg), min(self.width - 1, col_end)
        r0, r1 = max(0, row_beg), min(self.height - 1, row_end)
        if c0 > c1 or r0 > r1:
            return
        self.glyphs[c0:c1 + 1, r0:r1 + 1] = brush.value
        self.styles[c0:c1 + 1, r0:r1 + 1] = brush.name

    # -------------------------------------------------------------------------
    # Fill and borders
    # -------------------------------------------------------------------------

    def fill(self, brush: Optional[Brush] = None) -> "Canvas":
        """Set every cell to brush (the Main brush by default)."""
        if brush is None:
            brush = self.palette.get(MAIN)
        self._paint_region(0, self.width - 1, 0, self.height - 1, brush)
        return self

    def clear(self) -> "Canvas":
        return self.fill(self.palette.blank)

    def draw_borders(self, sides: Borders = Borders.ALL) -> "Canvas":
        """Paint the selected edges with their dedicated Border* brushes."""
        right, top = self.width - 1, self.height - 1
        if sides & Borders.LEFT:
            self._paint_region(0, 0, 0, top, self.palette.get(BORDER_LEFT))
        if sides & Borders.RIGHT:
            self._paint_region(right, right, 0, top, self.palette.get(BORDER_RIGHT))
        if sides & Borders.BOTTOM:
            self._paint_region(0, right, 0, 0, self.palette.get(BORDER_BOTTOM))
        if sides & Borders.TOP:
            self._paint_region(0, right, top, top, self.palette.get(BORDER_TOP))
        return self

    # -------------------------------------------------------------------------
    # Lines
    # -------------------------------------------------------------------------

    def draw_line_horizontal_at_row(self, row) -> "Canvas":
        """Full-width line at an integer row, or at a float ratio of the height."""
        if isinstance(row, float):
            row = int(self.height * max(0.0, min(1.0, row)))
        if 0 <= row < self.height:
            self._paint_region(0, self.width - 1, row, row, self.palette.get(LINE_HORIZONTAL))
        return self

    def draw_line_vertical_at_col(self, col) -> "Canvas":
        """Full-height line at an integer column, or at a float ratio of the width."""
        if isinstance(col, float):
            col = int(self.width * max(0.0, min(1.0, col)))
        if 0 <= col < self.width:
            self._paint_region(col, col, 0, self.height - 1, self.palette.get(LINE_VERTICAL))
        return self

    def draw_line_horizontal_at_y(self, y: float) -> "Canvas":
        if self.ylim_bottom < y < self.ylim_top:
            return self.draw_line_horizontal_at_row(self._to_row(y))
        return self

    def draw_line_vertical_at_x(self, x: float) -> "Canvas":
        if self.xlim_left < x < self.xlim_right:
            return self.draw_line_vertical_at_col(self._to_col(x))
        return self

    @property
    def xstep(self) -> float:
        return (self.xlim_right - self.xlim_left) / self.width

    @property
    def ystep(self) -> float:
        return (self.ylim_top - self.ylim_bottom) / self.height

    def _to_col(self, x: float) -> int:
        return int((x - self.xlim_left) / self.xstep)

    def _to_row(self, y: float) -> int:
        return int((y - self.ylim_bottom) / self.ystep)

    def draw_line(self, x_begin: float, y_begin: float, x_end: float, y_end: float) -> "Canvas":
        """
        Draw a data-space segment with the Main brush.

        Steps one cell at a time along the axis with the larger delta and
        interpolates the other axis, so steep lines have no gaps.
        """
        brush = self.palette.get(MAIN)
        col_beg, row_beg = self._to_col(x_begin), self._to_row(y_begin)
        col_end, row_end = self._to_col(x_end), self._to_row(y_end)
        delta_col = col_end - col_beg
        delta_row = row_end - row_beg
        n = max(abs(delta_col), abs(delta_row)) + 1

        if abs(delta_col) < abs(delta_row):
            x_adv = (x_end - x_begin) / n
            sign = 1 if row_beg < row_end else -1
            x_current = x_begin
            for k in range(n):
                self.put(self._to_col(x_current), row_beg + sign * k, brush)
                x_current += x_adv
        else:
            y_adv = (y_end - y_begin) / n
            sign = 1 if col_beg < col_end else -1
            y_current = y_begin
            for k in range(n):
                self.put(col_beg + sign * k, self._to_row(y_current), brush)
                y_current += y_adv
        return self

    def draw_line_between(self, begin: PositionLike, end: PositionLike) -> "Canvas":
        """Draw a line between two canvas positions."""
        col_beg, row_beg = resolve_absolute(begin, self.width, self.height)
        col_end, row_end = resolve_absolute(end, self.width, self.height)
        to_x = lambda col: col * self.xstep + self.xlim_left
        to_y = lambda row: row * self.ystep + self.ylim_bottom
        return self.draw_line(to_x(col_beg), to_y(row_beg), to_x(col_end), to_y(row_end))

    # -------------------------------------------------------------------------
    # Points and data
    # -------------------------------------------------------------------------

    def _inside_limits(self, x: float, y: float) -> bool:
        return self.xlim_left < x < self.xlim_right and self.ylim_bottom < y < self.ylim_top

    def draw_point(self, x: float, y: float) -> "Canvas":
        if self._inside_limits(x, y):
            self.put(self._to_col(x), self._to_row(y), self.palette.get(MAIN))
        return self

    def draw_points(self, x: Sequence[float], y: Sequence[float], how_many: Optional[int] = None) -> "Canvas":
        """Scatter points with the Main brush, fitting the auto-limited bounds first."""
        xs = np.asarray(x, dtype=float)
        ys = np.asarray(y, dtype=float)
        if xs.shape != ys.shape:
            raise InconsistentData()
        self.set_auto_limits(xs, ys)

        n = xs.size if how_many is None else min(xs.size, how_many)
        brush = self.palette.get(MAIN)
        for xv, yv in zip(xs[:n], ys[:n]):
            if self._inside_limits(xv, yv):
                self.put(self._to_col(xv), self._to_row(yv), brush)
        return self

    def plot_data(
        self,
        x: Sequence[float],
        y: Sequence[float],
        label: str = "",
        how_many: Optional[int] = None,
    ) -> "Canvas":
        """Scatter a series and register it in the legend."""
        self.draw_points(x, y, how_many)
        length = len(x) if how_many is None else min(len(x), how_many)
        self.metadata.append(PlotMetadata(self.palette.get(MAIN), label, length))
        return self

    def set_auto_limits(self, x: Sequence[float], y: Sequence[float]) -> "Canvas":
        """Fit the bounds enabled in self.autolimit to the data, widened by the margins."""
        xs = np.asarray(x, dtype=float)
        ys = np.asarray(y, dtype=float)

        if xs.size > 0:
            fit_left = bool(self.autolimit & Borders.LEFT)
            fit_right = bool(self.autolimit & Borders.RIGHT)
            if fit_left:
                self.xlim_left = float(xs.min())
            if fit_right:
                self.xlim_right = float(xs.max())
            surplus = abs((self.xlim_right - self.xlim_left) * self.xlim_margin)
            if fit_left:
                self.xlim_left -= surplus
            if fit_right:
                self.xlim_right += surplus
            self.xlim_left, self.xlim_right = _widen_degenerate(self.xlim_left, self.xlim_right)

        if ys.size > 0:
            fit_bottom = bool(self.autolimit & Borders.BOTTOM)
            fit_top = bool(self.autolimit & Borders.TOP)
            if fit_bottom:
                self.ylim_bottom = float(ys.min())
            if fit_top:
                self.ylim_top = float(ys.max())
            surplus = abs((self.ylim_top - self.ylim_bottom) * self.ylim_margin)
            if fit_bottom:
                self.ylim_bottom -= surplus
            if fit_top:
                self.ylim_top += surplus
            self.ylim_bottom, self.ylim_top = _widen_degenerate(self.ylim_bottom, self.ylim_top)
        return self

    def auto_limit(self, borders: Borders) -> "Canvas":
        self.autolimit = borders
        return self

    # -------------------------------------------------------------------------
    # Text
    # -------------------------------------------------------------------------

    def draw_text(self, text: str, position: PositionLike, adjust: bool = True) -> "Canvas":
        """Write text left to right, clipped at the canvas edges."""
        if adjust:
            position = adjust_for_bounded_box(position, len(text), 1, False, self.width, self.height)
        col, row = resolve_absolute(position, self.width, self.height)
        if 0 <= row < self.height:
            for i, char in enumerate(text):
                if 0 <= col + i < self.width:
                    self.put(col + i, row, Brush(char))
        return self

    def draw_text_centered(self, text: str, position: PositionLike, adjust: bool = True) -> "Canvas":
        return self.draw_text(text, as_position(position) - Offset(len(text) // 2, 0), adjust)

    def draw_text_vertical(self, text: str, position: PositionLike, adjust: bool = True) -> "Canvas":
        """Write text top to bottom, one row per character."""
        if adjust:
            position = adjust_for_bounded_box(position, 1, len(text), False, self.width, self.height)
        col, row = resolve_absolute(position, self.width, self.height)
        if 0 <= col < self.width:
            for j, char in enumerate(text):
                if 0 <= row - j < self.height:
                    self.put(col, row - j, Brush(char))
        return self

    def draw_text_vertical_centered(self, text: str, position: PositionLike, adjust: bool = True) -> "Canvas":
        return self.draw_text_vertical(text, as_position(position) + Offset(0, len(text) // 2), adjust)

    def draw_title(self) -> "Canvas":
        return self.draw_text_centered(self.title, Anchor.NORTH, adjust=False)

    # -------------------------------------------------------------------------
    # Boxes and regions
    # -------------------------------------------------------------------------

    def _corners(self, corner1: PositionLike, corner2: PositionLike) -> tuple[int, int, int, int]:
        c1, r1 = resolve_absolute(corner1, self.width, self.height)
        c2, r2 = resolve_absolute(corner2, self.width, self.height)
        return min(c1, c2), max(c1, c2), min(r1, r2), max(r1, r2)

    def draw_box(self, corner1: PositionLike, corner2: PositionLike, brush: Optional[Brush] = None) -> "Canvas":
        """Fill the inclusive rectangle between two corners (Area brush by default)."""
        if brush is None:
            brush = self.palette.get(AREA)
        col_beg, col_end, row_beg, row_end = self._corners(corner1, corner2)
        self._paint_region(col_beg, col_end, row_beg, row_end, brush)
        return self

    def extract(self, corner1: PositionLike, corner2: PositionLike) -> "Canvas":
        """Copy the inclusive rectangle between two corners into a new canvas."""
        col_beg, col_end, row_beg, row_end = self._corners(corner1, corner2)
        extracted = self._new_like(col_end - col_beg + 1, row_end - row_beg + 1)

        c0, c1 = max(0, col_beg), min(self.width - 1, col_end)
        r0, r1 = max(0, row_beg), min(self.height - 1, row_end)
        if c0 <= c1 and r0 <= r1:
            glyphs, styles = self._snapshot_arrays()
            extracted._write_block(
                c0 - col_beg,
                r0 - row_beg,
                glyphs[c0:c1 + 1, r0:r1 + 1].copy(),
                styles[c0:c1 + 1, r0:r1 + 1].copy(),
            )
        return extracted

    def _new_like(self, width: int, height: int) -> "Canvas":
        """Blank plain canvas sharing this canvas's config, palette and limits."""
        other = Canvas(width, height, config=self.config)
        other.palette = self.palette.copy()
        other.xlim_left, other.xlim_right = self.xlim_left, self.xlim_right
        other.ylim_bottom, other.ylim_top = self.ylim_bottom, self.ylim_top
        return other.clear()

    def blank_like(self) -> "Canvas":
        return self._new_like(self.width, self.height)

    def is_like(self, other: "Canvas") -> bool:
        return self.width == other.width and self.height == other.height

    def shift(self, offset) -> "Canvas":
        """Translate the contents without wrapping; vacated cells become blank."""
        shifted = self.blank_like()
        shifted.fuse(self, as_position(offset), keep_blanks=True, adjust=False)
        glyphs, styles = shifted._snapshot_arrays()
        self._write_block(0, 0, glyphs, styles)
        return self

    # -------------------------------------------------------------------------
    # Fusion
    # -------------------------------------------------------------------------

    def fuse(
        self,
        source: "Canvas",
        position: PositionLike = Anchor.SOUTH_WEST,
        keep_blanks: bool = True,
        adjust: bool = True,
    ) -> "Canvas":
        """
        Overlay source onto this canvas at position.

        Only the intersection of the translated source with this canvas is
        copied. With keep_blanks=False, source cells styled Blank are skipped
        so the existing content shows through.
        """
        if adjust:
            position = adjust_for_bounded_box(position, source.width, source.height, True, self.width, self.height)
        off_col, off_row = resolve_absolute(position, self.width, self.height)

        col_beg = max(0, -off_col)
        col_end = min(source.width, self.width - off_col)
        row_beg = max(0, -off_row)
        row_end = min(source.height, self.height - off_row)
        if col_beg >= col_end or row_beg >= row_end:
            return self

        glyphs, styles = source._snapshot_arrays()
        glyphs = glyphs[col_beg:col_end, row_beg:row_end].copy()
        styles = styles[col_beg:col_end, row_beg:row_end].copy()
        mask = None if keep_blanks else (styles != BLANK)
        self._write_block(col_beg + off_col, row_beg + off_row, glyphs, styles, mask)
        return self

    def fusion(self) -> "Fusion":
        """Start a batch of fuse calls applied in order by Fusion.fuse()."""
        return Fusion(self)

    # -------------------------------------------------------------------------
    # Images
    # -------------------------------------------------------------------------

    def draw_image(
        self,
        image: "Image",
        gamma: Optional[Gamma] = None,
        position: PositionLike = Anchor.SOUTH_WEST,
        max_width: Optional[int] = None,
        max_height: Optional[int] = None,
    ) -> "Canvas":
        """Rasterize an image through a gamma function and fuse it at position."""
        max_width = self.width if max_width is None else max_width
        max_height = self.height if max_height is None else max_height
        if gamma is None:
            gamma = FixedGamma(self.config.gamma)

        fitted = image
        if image.width > max_width or image.height > max_height:
            fitted = image.copy().resize(min(image.width, max_width), min(image.height, max_height))
        width = min(fitted.width, max_width)
        height = min(fitted.height, max_height)
        if width <= 0 or height <= 0:
            return self

        sub = Canvas(width, height, config=self.config)
        for row in range(height - 1, -1, -1):
            for col in range(width):
                sub.put(col, row, gamma(fitted.at(col, row)))
        return self.fuse(sub, position)

    # -------------------------------------------------------------------------
    # Legend
    # -------------------------------------------------------------------------

    def draw_legend(self, position: PositionLike = Anchor.NORTH_EAST) -> "Canvas":
        """Boxed list of 'glyph label' lines, newest entry at the bottom."""
        if not self.metadata:
            return self

        text_width = max(len(entry.label) for entry in self.metadata)
        box_width = text_width + self.config.legend_padding
        box_height = len(self.metadata) + 2

        box_position = calc_box_position(position, box_width, box_height)
        box_position = adjust_for_bounded_box(box_position, box_width, box_height, True, self.width, self.height)
        col, row = box_position.col, box_position.row
        top_row = row + box_height - 1
        right_col = col + box_width - 1

        self._paint_region(col + 1, right_col - 1, row + 1, top_row - 1, self.palette.blank)
        self._paint_region(col, right_col, row, row, self.palette.default(BORDER_BOTTOM))
        self._paint_region(col, right_col, top_row, top_row, self.palette.default(BORDER_TOP))
        self._paint_region(col, col, row, top_row - 1, self.palette.default(BORDER_LEFT))
        self._paint_region(right_col, right_col, row, top_row - 1, self.palette.default(BORDER_RIGHT))

        for i, entry in enumerate(self.metadata):
            self.draw_text(f"{entry.brush.value} {entry.label}", Position.at(col + 2, top_row - 1 - i))
        return self

    # -------------------------------------------------------------------------
    # Palette and limits
    # -------------------------------------------------------------------------

    def set_brush(self, name: str, value: str) -> "Canvas":
        self.palette.set(name, value)
        return self

    def set_main_brush(self, value: str) -> "Canvas":
        return self.set_brush(MAIN, value)

    def redraw(self) -> "Canvas":
        """Re-resolve every cell owned by a registered brush against the current palette."""
        for name in set(self.styles.flat):
            if name is None or not self.palette.has(name):
                continue
            self.glyphs[self.styles == name] = self.palette.glyph(name)
        return self

    def set_name(self, name: str) -> "Canvas":
        self.name = name
        return self

    def set_title(self, title: str) -> "Canvas":
        self.title = title
        return self

    def set_xlim_left(self, value: float) -> "Canvas":
        if value < self.xlim_right:
            self.xlim_left = value
        return self

    def set_xlim_right(self, value: float) -> "Canvas":
        if self.xlim_left < value:
            self.xlim_right = value
        return self

    def set_ylim_bottom(self, value: float) -> "Canvas":
        if value < self.ylim_top:
            self.ylim_bottom = value
        return self

    def set_ylim_top(self, value: float) -> "Canvas":
        if self.ylim_bottom < value:
            self.ylim_top = value
        return self

    def set_xlimits(self, left: float, right: float) -> "Canvas":
        if left < right:
            self.xlim_left, self.xlim_right = float(left), float(right)
        return self

    def set_ylimits(self, bottom: float, top: float) -> "Canvas":
        if bottom < top:
            self.ylim_bottom, self.ylim_top = float(bottom), float(top)
        return self

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def rows(self) -> list[str]:
        """Text rows from the top visual row down to row 0."""
        glyphs, _ = self._snapshot_arrays()
        return ["".join(glyphs[:, row]) for row in range(self.height - 1, -1, -1)]

    def serialize(self) -> str:
        return "\n".join(self.rows())

    def __str__(self) -> str:
        return self.serialize()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(width={self.width}, height={self.height})"


def _widen_degenerate(low: float, high: float) -> tuple[float, float]:
    # Single-valued data would give a zero step
    if low >= high:
        return low - 0.5, high + 0.5
    return low, high


# =============================================================================
# Fusion builder
# =============================================================================

class Fusion:
    """Queue of fuse calls onto one destination, applied in call order."""

    def __init__(self, canvas: Canvas):
        self.canvas = canvas
        self._pending: list[tuple[Canvas, PositionLike, bool, bool]] = []

    def __call__(
        self,
        source: Canvas,
        position: PositionLike = Anchor.SOUTH_WEST,
        keep_blanks: bool = True,
        adjust: bool = True,
    ) -> "Fusion":
        self._pending.append((source, position, keep_blanks, adjust))
        return self

    def __len__(self) -> int:
        return len(self._pending)

    def fuse(self) -> Canvas:
        for source, position, keep_blanks, adjust in self._pending:
            self.canvas.fuse(source, position, keep_blanks, adjust)
        self._pending.clear()
        return self.canvas
