"""Core types - positions, brushes, configuration and errors."""

from .errors import (
    GlyphGridError,
    InvalidPlotSize,
    InconsistentData,
    InvalidBrushValue,
    BMPFormatNotSupported,
)
from .position import (
    Anchor,
    Borders,
    Offset,
    Position,
    as_position,
    resolve_absolute,
    to_absolute,
    adjust_for_bounded_box,
    calc_box_position,
)
from .brush import (
    Brush,
    Palette,
    DEFAULT_GLYPHS,
    LETTER_BRUSHES,
    NUMBER_BRUSHES,
    SYMBOL_BRUSHES,
    string_to_brushes,
)
from .config import CanvasConfig, DEFAULT_GAMMA, resolve_canvas_size
from .themes import ThemeRegistry, get_theme_registry

__all__ = [
    # Errors
    "GlyphGridError",
    "InvalidPlotSize",
    "InconsistentData",
    "InvalidBrushValue",
    "BMPFormatNotSupported",
    # Positions
    "Anchor",
    "Borders",
    "Offset",
    "Position",
    "as_position",
    "resolve_absolute",
    "to_absolute",
    "adjust_for_bounded_box",
    "calc_box_position",
    # Brushes
    "Brush",
    "Palette",
    "DEFAULT_GLYPHS",
    "LETTER_BRUSHES",
    "NUMBER_BRUSHES",
    "SYMBOL_BRUSHES",
    "string_to_brushes",
    # Configuration
    "CanvasConfig",
    "DEFAULT_GAMMA",
    "resolve_canvas_size",
    "ThemeRegistry",
    "get_theme_registry",
]
