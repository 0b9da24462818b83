"""
Brushes and palettes.

A Brush is a (name, glyph) pair. Named brushes belong to a canvas palette and
can be re-resolved when the palette changes (Canvas.redraw). Brushes without a
name are anonymous ("general"): they carry an ad hoc glyph, e.g. one character
of rendered text, and are never treated as Blank during fusion.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from .errors import InvalidBrushValue


# Well-known brush names
MAIN = "Main"
BLANK = "Blank"
AREA = "Area"
LINE_HORIZONTAL = "LineHorizontal"
LINE_VERTICAL = "LineVertical"
BORDER_TOP = "BorderTop"
BORDER_BOTTOM = "BorderBottom"
BORDER_LEFT = "BorderLeft"
BORDER_RIGHT = "BorderRight"

DEFAULT_GLYPHS: dict[str, str] = {
    MAIN: "_",
    BLANK: " ",
    AREA: "#",
    LINE_HORIZONTAL: "-",
    LINE_VERTICAL: "|",
    BORDER_TOP: "_",
    BORDER_BOTTOM: "_",
    BORDER_LEFT: "|",
    BORDER_RIGHT: "|",
}

WELL_KNOWN_NAMES = tuple(DEFAULT_GLYPHS)

_WHITESPACE_SUBSTITUTES = {"\t", "\n", "\r"}


def _is_printable_ascii(char: str) -> bool:
    return 0x20 <= ord(char) < 0x7F


def normalize_glyph(value) -> str:
    """
    Validate and normalise a brush value into a one-cell glyph.

    - first character printable ASCII: that character alone
    - a lone tab, CR or LF: a space
    - a lone printable non-ASCII character: kept as is
    - longer values starting with anything else: first two characters verbatim
    """
    if not isinstance(value, str) or len(value) == 0:
        raise InvalidBrushValue()

    first = value[0]
    if _is_printable_ascii(first):
        return first
    if len(value) == 1:
        if first in _WHITESPACE_SUBSTITUTES:
            return " "
        if first.isprintable():
            return first
        raise InvalidBrushValue()
    if first == "\x00":
        raise InvalidBrushValue()
    return value[:2]


@dataclass(frozen=True)
class Brush:
    """A style name and the glyph it paints. name=None marks an anonymous brush."""
    value: str
    name: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "value", normalize_glyph(self.value))
        if self.name == "":
            object.__setattr__(self, "name", None)

    @classmethod
    def named(cls, name: str, value: str) -> "Brush":
        return cls(value, name)

    @property
    def is_general(self) -> bool:
        return self.name is None

    @property
    def is_blank(self) -> bool:
        return self.name == BLANK

    def renamed(self, name: Optional[str]) -> "Brush":
        return Brush(self.value, name)


def string_to_brushes(text: str) -> list[Brush]:
    """One anonymous brush per character."""
    return [Brush(char) for char in text]


LETTER_BRUSHES = tuple(string_to_brushes("abcdefghijklmnopqrstuvwxyz"))
NUMBER_BRUSHES = tuple(string_to_brushes("0123456789"))
SYMBOL_BRUSHES = tuple(string_to_brushes("@$*#.+&*=?,-%!^\"<~>'"))


class Palette:
    """
    Mapping from brush name to glyph.

    Lookups never fail: an unknown name resolves to the Blank brush, so callers
    do not have to register every style before painting with it.
    """

    def __init__(self, defaults: Optional[Mapping[str, str]] = None):
        self._defaults = {name: normalize_glyph(value) for name, value in DEFAULT_GLYPHS.items()}
        if defaults:
            for name, value in defaults.items():
                self._defaults[name] = normalize_glyph(value)
        self._glyphs: dict[str, str] = {}
        self.reset()

    def reset(self) -> "Palette":
        """Restore the well-known names to their configured defaults."""
        self._glyphs = {name: self._defaults[name] for name in WELL_KNOWN_NAMES}
        return self

    def set(self, name: str, value: str) -> "Palette":
        self._glyphs[name] = normalize_glyph(value)
        return self

    def set_brush(self, brush: Brush) -> "Palette":
        if brush.name is None:
            raise InvalidBrushValue("Anonymous brushes cannot be registered in a palette.")
        self._glyphs[brush.name] = brush.value
        return self

    def set_many(self, names: Iterable[str], value: str) -> "Palette":
        glyph = normalize_glyph(value)
        for name in names:
            self._glyphs[name] = glyph
        return self

    def get(self, name: str) -> Brush:
        glyph = self._glyphs.get(name)
        if glyph is None:
            return self.blank
        return Brush(glyph, name)

    def glyph(self, name: str) -> str:
        return self._glyphs.get(name, self._glyphs.get(BLANK, " "))

    def default(self, name: str) -> Brush:
        """The configured default brush for a well-known name, ignoring later overrides."""
        return Brush(self._defaults.get(name, self._defaults[BLANK]), name)

    def has(self, name: str) -> bool:
        return name in self._glyphs

    @property
    def blank(self) -> Brush:
        return Brush(self._glyphs.get(BLANK, self._defaults[BLANK]), BLANK)

    def copy(self) -> "Palette":
        clone = Palette.__new__(Palette)
        clone._defaults = dict(self._defaults)
        clone._glyphs = dict(self._glyphs)
        return clone

    def to_dict(self) -> dict[str, str]:
        return dict(self._glyphs)

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def __getitem__(self, name: str) -> str:
        return self.glyph(name)

    def __len__(self) -> int:
        return len(self._glyphs)
