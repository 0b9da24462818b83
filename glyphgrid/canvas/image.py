"""
Grayscale images decoded from uncompressed BMP files.

Pixels are stored as a (height, width) numpy array of 0..255 intensities.
Row 0 is the first row stored in the file, which for a BMP is the bottom
one, so images land upright on a canvas whose row 0 is also the bottom.
"""

from __future__ import annotations

import logging
import struct
from pathlib import Path
from typing import Union

import numpy as np

from ..core.errors import BMPFormatNotSupported

logger = logging.getLogger(__name__)

BMP_TAGS = {b"BM", b"BA", b"CI", b"CP", b"IC", b"PC"}
SUPPORTED_BPP = (1, 24, 32)

# After the 2-byte tag: file size, reserved, pixel offset, header length,
# width, height, planes, bits per pixel, compression, raw image size
_HEADER = struct.Struct("<IIIIiiHHII")
_HEADER_END = 2 + _HEADER.size

BI_RGB = 0
BI_BITFIELDS = 3


def _default_stride(width: int, bpp: int) -> int:
    if bpp == 1:
        return (width + 7) // 8
    if bpp == 24:
        return ((width * 3 + 3) // 4) * 4
    return width * 4


class Image:
    """A grayscale image; at(x, y) returns an intensity in 0..255."""

    def __init__(self, pixels):
        pixels = np.asarray(pixels)
        if pixels.ndim != 2:
            raise ValueError("Image pixels must be a 2D (height, width) array")
        self.pixels = np.clip(pixels, 0, 255).astype(np.int32)

    # -------------------------------------------------------------------------
    # Decoding
    # -------------------------------------------------------------------------

    @classmethod
    def from_bytes(cls, data: bytes) -> "Image":
        """Decode a 1, 24 or 32 bit uncompressed BMP."""
        if len(data) < _HEADER_END or data[:2] not in BMP_TAGS:
            raise BMPFormatNotSupported()

        (_size, _reserved, offset, _header_length, width, height,
         _planes, bpp, compression, raw_size) = _HEADER.unpack_from(data, 2)

        if bpp not in SUPPORTED_BPP:
            raise BMPFormatNotSupported(f"BMP with {bpp} bits per pixel not supported.")
        if compression != BI_RGB and not (compression == BI_BITFIELDS and bpp == 32):
            raise BMPFormatNotSupported(f"BMP compression {compression} not supported.")
        if width < 0 or height < 0:
            raise BMPFormatNotSupported("BMP dimensions cannot be negative.")

        stride = _default_stride(width, bpp)
        if height > 0 and raw_size >= stride * height and raw_size % height == 0:
            stride = raw_size // height

        payload = data[offset:offset + stride * height]
        if len(payload) < stride * height:
            raise BMPFormatNotSupported("BMP pixel data is truncated.")

        rows = np.frombuffer(payload, dtype=np.uint8).reshape(height, stride)
        if bpp == 1:
            pixels = np.unpackbits(rows, axis=1)[:, :width].astype(np.int32) * 255
        else:
            channels = bpp // 8
            pixels = rows[:, :width * channels].reshape(height, width, channels)
            pixels = pixels[:, :, :3].astype(np.int32).sum(axis=2) // 3

        logger.debug("Decoded %dx%d BMP at %d bpp", width, height, bpp)
        return cls(pixels)

    @classmethod
    def open(cls, path: Union[str, Path]) -> "Image":
        return cls.from_bytes(Path(path).read_bytes())

    @classmethod
    def from_array(cls, pixels) -> "Image":
        return cls(pixels)

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def at(self, x: int, y: int) -> int:
        return int(self.pixels[y, x])

    def copy(self) -> "Image":
        return Image(self.pixels.copy())

    # -------------------------------------------------------------------------
    # Transforms (in place)
    # -------------------------------------------------------------------------

    def invert(self) -> "Image":
        self.pixels = 255 - self.pixels
        return self

    def resize(self, new_width: int, new_height: int) -> "Image":
        """
        Downscale by block averaging, truncating each average.

        Sizes that would enlarge either dimension (or empty it) leave the
        image unchanged. When a dimension does not divide evenly the leading
        blocks are one pixel larger.
        """
        if not (0 < new_width <= self.width and 0 < new_height <= self.height):
            return self

        row_sizes = _block_sizes(self.height, new_height)
        col_sizes = _block_sizes(self.width, new_width)
        row_starts = np.concatenate(([0], np.cumsum(row_sizes)[:-1]))
        col_starts = np.concatenate(([0], np.cumsum(col_sizes)[:-1]))

        sums = np.add.reduceat(self.pixels.astype(np.int64), row_starts, axis=0)
        sums = np.add.reduceat(sums, col_starts, axis=1)
        counts = np.outer(row_sizes, col_sizes)
        self.pixels = (sums // counts).astype(np.int32)
        return self

    def scale(self, ratio: float) -> "Image":
        """Resize both dimensions by ratio; only shrinking ratios in (0, 1) apply."""
        if not 0 < ratio < 1:
            return self
        return self.resize(max(1, int(self.width * ratio)), max(1, int(self.height * ratio)))

    def __repr__(self) -> str:
        return f"Image(width={self.width}, height={self.height})"


def _block_sizes(length: int, blocks: int) -> np.ndarray:
    size, extra = divmod(length, blocks)
    return np.array([size + (1 if i < extra else 0) for i in range(blocks)], dtype=np.int64)
