"""
Gamma functions: map an 8-bit intensity (0 = black, 255 = white) to a brush.

- FixedGamma: a glyph ramp split into 256 contiguous buckets
- ThresholdGamma: below a threshold the zero glyph, above it a random pick
- TextGamma: below a threshold the zero glyph, above it the next char of a text
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Optional

from ..core.brush import Brush
from ..core.config import DEFAULT_GAMMA
from ..core.errors import InvalidBrushValue

LEVELS = 256


def _clamp_level(level) -> int:
    return max(0, min(LEVELS - 1, int(level)))


class Gamma(ABC):
    """Intensity to brush mapping used by Canvas.draw_image."""

    @abstractmethod
    def __call__(self, level: int) -> Brush:
        ...


class FixedGamma(Gamma):
    """
    Deterministic glyph ramp, darkest glyph first.

    With n glyphs each gets 256 // n levels; the first 256 % n glyphs get one
    extra so the buckets cover 0..255 with no gaps.
    """

    def __init__(self, glyphs: str = DEFAULT_GAMMA):
        self._glyphs = ""
        self._table: list[Brush] = []
        self.set(glyphs)

    def set(self, glyphs: str) -> "FixedGamma":
        if not glyphs:
            raise InvalidBrushValue("A gamma ramp needs at least one glyph.")
        glyphs = glyphs[:LEVELS]
        brushes = [Brush(char) for char in glyphs]

        per_glyph, extra = divmod(LEVELS, len(glyphs))
        table: list[Brush] = []
        for i, brush in enumerate(brushes):
            table.extend([brush] * (per_glyph + (1 if i < extra else 0)))

        self._glyphs = glyphs
        self._table = table
        return self

    def shuffle(self, rng: Optional[random.Random] = None) -> "FixedGamma":
        """Rebuild the table from a random permutation of the glyphs."""
        chars = list(self._glyphs)
        (rng or random.Random()).shuffle(chars)
        return self.set("".join(chars))

    @property
    def glyphs(self) -> str:
        return self._glyphs

    def __call__(self, level: int) -> Brush:
        return self._table[_clamp_level(level)]

    def __str__(self) -> str:
        return "".join(brush.value for brush in self._table)


class _ThresholdedGamma(Gamma):
    def __init__(self, threshold: int = 128, zero: str = " "):
        self.threshold = threshold
        self.zero = Brush(zero)

    def __call__(self, level: int) -> Brush:
        if int(level) < self.threshold:
            return self.zero
        return self._bright()

    @abstractmethod
    def _bright(self) -> Brush:
        ...


class ThresholdGamma(_ThresholdedGamma):
    """Zero glyph below the threshold, a random glyph from glyphs at or above it."""

    def __init__(
        self,
        glyphs: str = DEFAULT_GAMMA,
        threshold: int = 128,
        zero: str = " ",
        rng: Optional[random.Random] = None,
    ):
        super().__init__(threshold, zero)
        if not glyphs:
            raise InvalidBrushValue("A gamma ramp needs at least one glyph.")
        self.brushes = [Brush(char) for char in glyphs]
        self.rng = rng or random.Random()

    def _bright(self) -> Brush:
        return self.rng.choice(self.brushes)


class TextGamma(_ThresholdedGamma):
    """
    Zero glyph below the threshold; bright cells spell out text, cycling.

    The position in the text carries over between draw_image calls, so a
    second image continues the phrase where the first stopped. Call reset()
    to start again from the first character.
    """

    def __init__(self, text: str = "glyphgrid", threshold: int = 128, zero: str = " "):
        super().__init__(threshold, zero)
        if not text:
            raise InvalidBrushValue("TextGamma needs a non-empty text.")
        self.brushes = [Brush(char) for char in text]
        self.count = 0

    def _bright(self) -> Brush:
        brush = self.brushes[self.count % len(self.brushes)]
        self.count += 1
        return brush

    def reset(self) -> "TextGamma":
        self.count = 0
        return self
