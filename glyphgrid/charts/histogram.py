"""Histograms drawn as equal-width bars, one per bin, labelled with counts."""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from ..core.brush import AREA
from ..core.config import CanvasConfig, TerminalSize
from ..canvas.canvas import PlotMetadata
from .bars import Bar, BarCanvas


class HistogramCanvas(BarCanvas):
    """BarCanvas that bins a sample; bins defaults to one per column."""

    def __init__(
        self,
        width: int = 0,
        height: int = 0,
        bins: Optional[int] = None,
        config: Optional[CanvasConfig] = None,
        terminal_size: Optional[TerminalSize] = None,
    ):
        super().__init__(width, height, config, terminal_size)
        self.bins = bins if bins and bins > 0 else self.width
        self.bin_counts: list[int] = []

    def plot_histogram(
        self,
        data: Sequence[float],
        label: str = "",
        height_resize: Optional[float] = None,
    ) -> "HistogramCanvas":
        values = np.asarray(data, dtype=float)
        if values.size == 0:
            return self
        if height_resize is None:
            height_resize = self.config.height_resize

        nbins = min(self.bins, np.unique(values).size)
        low, high = float(values.min()), float(values.max())
        step = (high - low) / (nbins - 1) if nbins > 1 else 1.0
        left = low - step / 2
        self.set_xlimits(left, high + step / 2)

        indices = np.clip(np.floor((values - left) / step).astype(int), 0, nbins - 1)
        counts = np.bincount(indices, minlength=nbins)
        self.bin_counts = counts.tolist()

        peak = int(counts.max())
        factor = min(1.0, height_resize)
        brush = self.palette.get(AREA)
        bin_width = self.width // nbins
        bars = [
            Bar(
                column=i * bin_width,
                width=bin_width,
                height=int(count / peak * self.height * factor),
                name=str(int(count)),
                brush=brush,
            )
            for i, count in enumerate(counts)
        ]
        self.metadata.append(PlotMetadata(brush, label, int(values.size)))
        return self.plot_bars(bars)
