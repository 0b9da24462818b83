"""
Coordinate and position algebra.

Canvas coordinates are (col, row) with row 0 at the bottom. A Position is a
relative anchor (one of nine compass points) plus an Offset that is applied
after the anchor has been resolved against a canvas size.

    NW ---- N ---- NE
    |              |
    W    Center    E
    |              |
    SW ---- S ---- SE      SW + (0, 0) == absolute (0, 0)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntFlag
from typing import Union


class Borders(IntFlag):
    """Bitmask of canvas sides, used by draw_borders and auto-limits."""
    NONE = 0x00
    LEFT = 0x01
    RIGHT = 0x02
    BOTTOM = 0x04
    TOP = 0x08
    ALL = 0x0F

    def __add__(self, other: "Borders") -> "Borders":
        return self | other

    def __sub__(self, other: "Borders") -> "Borders":
        return Borders(self & ~other & Borders.ALL)


class Anchor(Enum):
    """Relative anchor of a Position."""
    NORTH = "north"
    NORTH_EAST = "north_east"
    EAST = "east"
    SOUTH_EAST = "south_east"
    SOUTH = "south"
    SOUTH_WEST = "south_west"
    WEST = "west"
    NORTH_WEST = "north_west"
    CENTER = "center"

    def __add__(self, other) -> "Position":
        return Position(_as_offset(other), self)

    def __radd__(self, other) -> "Position":
        return Position(_as_offset(other), self)

    def __sub__(self, other) -> "Position":
        return Position(-_as_offset(other), self)


@dataclass(frozen=True)
class Offset:
    """Integer column/row displacement."""
    col: int = 0
    row: int = 0

    def __add__(self, other) -> "Offset":
        other = _as_offset(other)
        return Offset(self.col + other.col, self.row + other.row)

    def __sub__(self, other) -> "Offset":
        other = _as_offset(other)
        return Offset(self.col - other.col, self.row - other.row)

    def __neg__(self) -> "Offset":
        return Offset(-self.col, -self.row)

    def as_tuple(self) -> tuple[int, int]:
        return (self.col, self.row)


@dataclass(frozen=True)
class Position:
    """An anchor plus an offset. SouthWest with offset (c, r) is absolute (c, r)."""
    offset: Offset = field(default_factory=Offset)
    anchor: Anchor = Anchor.SOUTH_WEST

    @classmethod
    def at(cls, col: int, row: int, anchor: Anchor = Anchor.SOUTH_WEST) -> "Position":
        return cls(Offset(col, row), anchor)

    @property
    def is_absolute(self) -> bool:
        return self.anchor is Anchor.SOUTH_WEST

    @property
    def col(self) -> int:
        return self.offset.col

    @property
    def row(self) -> int:
        return self.offset.row

    def __add__(self, other) -> "Position":
        return Position(self.offset + _as_offset(other), self.anchor)

    def __sub__(self, other) -> "Position":
        return Position(self.offset - _as_offset(other), self.anchor)


PositionLike = Union[Position, Anchor, Offset, tuple]


def _as_offset(value) -> Offset:
    if isinstance(value, Offset):
        return value
    if isinstance(value, tuple) and len(value) == 2:
        return Offset(int(value[0]), int(value[1]))
    raise TypeError(f"Cannot interpret {value!r} as an Offset")


def as_position(value: PositionLike) -> Position:
    """Coerce an Anchor, Offset, (col, row) tuple or Position into a Position."""
    if isinstance(value, Position):
        return value
    if isinstance(value, Anchor):
        return Position(Offset(), value)
    return Position(_as_offset(value))


def _anchor_base(anchor: Anchor, width: int, height: int) -> tuple[int, int]:
    if anchor is Anchor.NORTH:
        return width // 2, height - 1
    if anchor is Anchor.NORTH_EAST:
        return width - 1, height - 1
    if anchor is Anchor.EAST:
        return width - 1, height // 2
    if anchor is Anchor.SOUTH_EAST:
        return width - 1, 0
    if anchor is Anchor.SOUTH:
        return width // 2, 0
    if anchor is Anchor.WEST:
        return 0, height // 2
    if anchor is Anchor.NORTH_WEST:
        return 0, height - 1
    if anchor is Anchor.CENTER:
        return width // 2, height // 2
    return 0, 0


def resolve_absolute(position: PositionLike, width: int, height: int) -> tuple[int, int]:
    """Resolve a position to absolute (col, row) on a width x height canvas."""
    position = as_position(position)
    base_col, base_row = _anchor_base(position.anchor, width, height)
    return base_col + position.col, base_row + position.row


def to_absolute(position: PositionLike, width: int, height: int) -> Position:
    """Like resolve_absolute, but returns a SouthWest Position."""
    col, row = resolve_absolute(position, width, height)
    return Position(Offset(col, row))


def adjust_for_bounded_box(
    position: PositionLike,
    box_width: int,
    box_height: int,
    grows_upward: bool,
    width: int,
    height: int,
) -> Position:
    """
    Pull a box anchored at position back onto the canvas.

    The box extends right from its column and, depending on grows_upward,
    either up (fused canvases) or down (text) from its row.
    """
    col, row = resolve_absolute(position, width, height)

    new_col = max(0, col)
    new_row = max(0, min(height - 1, row))
    free_cols = width - new_col
    free_rows = (height - new_row) if grows_upward else (new_row + 1)

    if free_cols < box_width:
        new_col = max(0, width - box_width)
    if free_rows < box_height:
        if grows_upward:
            new_row = max(0, height - box_height)
        else:
            new_row = min(height - 1, box_height - 1)

    return Position(Offset(new_col, new_row))


def calc_box_position(position: PositionLike, box_width: int, box_height: int) -> Position:
    """Shift position so that a box_width x box_height box sits inside its anchor corner."""
    position = as_position(position)
    shifts = {
        Anchor.NORTH: (box_width // 2, box_height),
        Anchor.NORTH_EAST: (box_width, box_height),
        Anchor.EAST: (box_width, box_height // 2),
        Anchor.SOUTH_EAST: (box_width, 0),
        Anchor.SOUTH: (box_width // 2, 0),
        Anchor.SOUTH_WEST: (0, 0),
        Anchor.WEST: (0, box_height // 2),
        Anchor.NORTH_WEST: (0, box_height),
        Anchor.CENTER: (box_width // 2, box_height // 2),
    }
    return position - shifts[position.anchor]


# Short aliases, handy in chained drawing code
NORTH = Anchor.NORTH
NORTH_EAST = Anchor.NORTH_EAST
EAST = Anchor.EAST
SOUTH_EAST = Anchor.SOUTH_EAST
SOUTH = Anchor.SOUTH
SOUTH_WEST = Anchor.SOUTH_WEST
WEST = Anchor.WEST
NORTH_WEST = Anchor.NORTH_WEST
CENTER = Anchor.CENTER
