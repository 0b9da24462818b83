"""Exception taxonomy for glyphgrid.

All errors are raised synchronously at the point of violation and are never
caught inside the package.
"""


class GlyphGridError(ValueError):
    """Base class for every error raised by glyphgrid."""

    default_message = "Invalid glyphgrid operation."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class InvalidPlotSize(GlyphGridError):
    default_message = "Plot height and width must be non-negative integer numbers."


class InconsistentData(GlyphGridError):
    default_message = "Data to be drawn is inconsistent."


class InvalidBrushValue(GlyphGridError):
    default_message = (
        "The value of a Brush must be a single printable character "
        "or a two-character glyph, and cannot be empty."
    )


class BMPFormatNotSupported(GlyphGridError):
    default_message = "BMP format not supported."
