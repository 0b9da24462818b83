"""Chart builders on top of Canvas."""

from .bars import Bar, BarCanvas, BarGrouper, format_value
from .histogram import HistogramCanvas

__all__ = [
    "Bar",
    "BarCanvas",
    "BarGrouper",
    "format_value",
    "HistogramCanvas",
]
