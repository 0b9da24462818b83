"""Canvas system - cells, drawing primitives, images and grid composition."""

from .canvas import Cell, PlotMetadata, Canvas, Fusion
from .gamma import Gamma, FixedGamma, ThresholdGamma, TextGamma
from .image import Image
from .grid import GridCanvas, GridSetter

__all__ = [
    "Cell",
    "PlotMetadata",
    "Canvas",
    "Fusion",
    # Images
    "Image",
    "Gamma",
    "FixedGamma",
    "ThresholdGamma",
    "TextGamma",
    # Composition
    "GridCanvas",
    "GridSetter",
]
