"""glyphgrid - compose ASCII-art canvases, charts and images as text."""

from .core import (
    GlyphGridError,
    InvalidPlotSize,
    InconsistentData,
    InvalidBrushValue,
    BMPFormatNotSupported,
    Anchor,
    Borders,
    Offset,
    Position,
    Brush,
    Palette,
    LETTER_BRUSHES,
    NUMBER_BRUSHES,
    SYMBOL_BRUSHES,
    CanvasConfig,
    ThemeRegistry,
)
from .core.position import (
    NORTH,
    NORTH_EAST,
    EAST,
    SOUTH_EAST,
    SOUTH,
    SOUTH_WEST,
    WEST,
    NORTH_WEST,
    CENTER,
)
from .canvas import (
    Cell,
    PlotMetadata,
    Canvas,
    Fusion,
    Image,
    Gamma,
    FixedGamma,
    ThresholdGamma,
    TextGamma,
    GridCanvas,
    GridSetter,
)
from .charts import Bar, BarCanvas, BarGrouper, HistogramCanvas, format_value

__version__ = "0.1.0"

__all__ = [
    # Errors
    "GlyphGridError",
    "InvalidPlotSize",
    "InconsistentData",
    "InvalidBrushValue",
    "BMPFormatNotSupported",
    # Core types
    "Anchor",
    "Borders",
    "Offset",
    "Position",
    "Brush",
    "Palette",
    "LETTER_BRUSHES",
    "NUMBER_BRUSHES",
    "SYMBOL_BRUSHES",
    "CanvasConfig",
    "ThemeRegistry",
    # Anchors
    "NORTH",
    "NORTH_EAST",
    "EAST",
    "SOUTH_EAST",
    "SOUTH",
    "SOUTH_WEST",
    "WEST",
    "NORTH_WEST",
    "CENTER",
    # Canvas
    "Cell",
    "PlotMetadata",
    "Canvas",
    "Fusion",
    "Image",
    "Gamma",
    "FixedGamma",
    "ThresholdGamma",
    "TextGamma",
    "GridCanvas",
    "GridSetter",
    # Charts
    "Bar",
    "BarCanvas",
    "BarGrouper",
    "HistogramCanvas",
    "format_value",
]
